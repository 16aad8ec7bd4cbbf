"""Name command - print the canonical archive name for a tag and platform."""

from __future__ import annotations

import typer

from relpack.cli.commands._helpers import exit_user_error, unwrap_or_exit
from relpack.cli.context import build_context
from relpack.release.errors import with_platform
from relpack.release.naming import artifact_name
from relpack.release.platforms import parse_platform
from relpack.release.semver import resolve_tag


def name(
    tag: str = typer.Option(..., "--tag", help="Release tag (e.g. v1.0.4)"),
    product: str | None = typer.Option(
        None, "--product", help="Product id (default: [product].name from config)"
    ),
    platform: str = typer.Option(..., "--platform", help="Target platform: windows|macos"),
) -> None:
    """Print the canonical archive file name."""
    ctx = build_context()
    product_id = product or ctx.config.product.name
    if product_id is None:
        exit_user_error(ctx, "--product is required (or set [product].name in relpack.toml)")

    target = unwrap_or_exit(parse_platform(platform), ctx)
    version = unwrap_or_exit(resolve_tag(tag).map_err(lambda e: with_platform(e, target)), ctx)
    ctx.console.print(unwrap_or_exit(artifact_name(product_id, version, target), ctx))
