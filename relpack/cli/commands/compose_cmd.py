"""Compose command - check a dist directory holds a complete release."""

from __future__ import annotations

from pathlib import Path

import typer

from relpack.cli.commands._helpers import exit_user_error, parse_platforms, unwrap_or_exit
from relpack.cli.context import build_context
from relpack.output.console import Style
from relpack.release.compose import compose as compose_release
from relpack.release.semver import resolve_tag
from relpack.services.manifest import save_manifest
from relpack.services.pipeline import discover_artifacts


def compose(
    tag: str = typer.Option(..., "--tag", help="Release tag (e.g. v1.0.4)"),
    product: str | None = typer.Option(
        None, "--product", help="Product id (default: [product].name from config)"
    ),
    dist_dir: Path | None = typer.Option(
        None, "--dist-dir", help="Directory holding the archives (default: config or dist)"
    ),
    platforms: list[str] | None = typer.Option(
        None,
        "--platform",
        help="Required platform, repeatable (default: [release].platforms from config)",
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest", help="Write a manifest.json describing the release"
    ),
) -> None:
    """Compose a release from the archives in a dist directory."""
    ctx = build_context()

    product_id = product or ctx.config.product.name
    if product_id is None:
        exit_user_error(ctx, "--product is required (or set [product].name in relpack.toml)")

    required = parse_platforms(platforms or ctx.config.release.platforms, ctx)
    directory = dist_dir if dist_dir is not None else Path(ctx.config.release.dist_dir)

    version = unwrap_or_exit(resolve_tag(tag), ctx)
    artifacts = unwrap_or_exit(
        discover_artifacts(directory, product=product_id, version=version, platforms=required),
        ctx,
    )
    release = unwrap_or_exit(compose_release(version, artifacts, required), ctx)

    ctx.console.success(release.title)
    for artifact in release.artifacts:
        ctx.console.print(f"{artifact.platform}: {artifact.filename}  sha256:{artifact.sha256}")

    if manifest is not None:
        out = unwrap_or_exit(save_manifest(release, manifest, product=product_id), ctx)
        ctx.console.print(f"manifest: {out}", Style.DIM)
