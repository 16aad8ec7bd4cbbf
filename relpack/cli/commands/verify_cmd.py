"""Verify command - check a written archive before it is published."""

from __future__ import annotations

from pathlib import Path

import typer

from relpack.cli.commands._helpers import unwrap_or_exit
from relpack.cli.context import build_context
from relpack.output.console import Style
from relpack.release.platforms import parse_platform
from relpack.release.verify import verify_archive


def verify(
    platform: str = typer.Option(..., "--platform", help="Platform the archive is for"),
    archive: Path = typer.Option(..., "--archive", help="Archive to check"),
    show: bool = typer.Option(False, "--list", help="List members with their modes"),
) -> None:
    """Check that an archive kept its links and executable bits."""
    ctx = build_context()
    target = unwrap_or_exit(parse_platform(platform), ctx)
    entries = unwrap_or_exit(verify_archive(archive, target), ctx)

    if show:
        for entry in entries:
            line = f"{entry.permissions:04o} {entry.name}"
            if entry.link_target is not None:
                line += f" -> {entry.link_target}"
            ctx.console.print(line, Style.DIM)
    ctx.console.success(f"{archive.name}: {len(entries)} member(s) ok for {target}")
