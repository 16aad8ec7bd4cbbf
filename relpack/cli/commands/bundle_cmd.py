"""Bundle command - package one platform's build output."""

from __future__ import annotations

from pathlib import Path

import typer

from relpack.cli.commands._helpers import unwrap_or_exit
from relpack.cli.context import build_context
from relpack.output.console import Style
from relpack.platform.detection import Platform
from relpack.release.bundler import bundle as bundle_output
from relpack.release.errors import with_platform
from relpack.release.naming import artifact_name
from relpack.release.platforms import parse_platform
from relpack.release.semver import resolve_tag
from relpack.release.verify import verify_archive


def bundle(
    tag: str = typer.Option(..., "--tag", help="Release tag (e.g. v1.0.4, v2.0.0-beta.1)"),
    product: str = typer.Option(..., "--product", help="Product id used in file names"),
    platform: str = typer.Option(..., "--platform", help="Target platform: windows|macos"),
    source: Path = typer.Option(..., "--source", help="Build output (file or .vst3 bundle)"),
    dest: Path = typer.Option(
        ..., "--dest", help="Archive path, or an existing directory to put it in"
    ),
    verify: bool = typer.Option(
        True, "--verify/--no-verify", help="Read the archive back and check it"
    ),
) -> None:
    """Bundle a build output into a release archive."""
    ctx = build_context()

    target = unwrap_or_exit(parse_platform(platform), ctx)
    version = unwrap_or_exit(resolve_tag(tag).map_err(lambda e: with_platform(e, target)), ctx)
    name = unwrap_or_exit(artifact_name(product, version, target), ctx)

    destination = dest / name if dest.is_dir() else dest
    if destination.name != name:
        ctx.console.warning(f"{destination.name} differs from the canonical name {name}")

    if target == Platform.MACOS and ctx.host is not None and not ctx.host.is_unix:
        ctx.console.warning(
            f"bundling for macos on {ctx.host}: the host cannot report executable bits or links"
        )

    artifact = unwrap_or_exit(bundle_output(source, target, destination, version=version), ctx)

    if verify:
        entries = unwrap_or_exit(verify_archive(artifact.path, target), ctx)
        ctx.console.print(f"verified {len(entries)} member(s)", Style.DIM)

    ctx.console.success(f"{target}: {artifact.filename} ({artifact.size} bytes)")
    ctx.console.print(str(artifact.path))
