"""Resolve command - print the version a tag resolves to."""

from __future__ import annotations

import typer

from relpack.cli.commands._helpers import unwrap_or_exit
from relpack.cli.context import build_context
from relpack.release.semver import resolve_tag


def resolve(
    tag: str = typer.Option(..., "--tag", help="Release tag (e.g. v1.0.4)"),
) -> None:
    """Print the semantic version a tag resolves to."""
    ctx = build_context()
    version = unwrap_or_exit(resolve_tag(tag), ctx)
    ctx.console.print(str(version))
