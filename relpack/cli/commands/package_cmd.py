"""Package command - bundle several platforms at once and compose the release."""

from __future__ import annotations

from pathlib import Path

import typer

from relpack.cli.commands._helpers import exit_user_error, parse_platforms, unwrap_or_exit
from relpack.cli.context import CLIContext, build_context
from relpack.core.result import Err
from relpack.output.console import Style
from relpack.output.errors import print_release_error, release_error_exit_code
from relpack.platform.detection import Platform
from relpack.release.compose import compose
from relpack.release.model import ArchiveArtifact
from relpack.release.naming import artifact_name
from relpack.release.platforms import parse_platform
from relpack.release.semver import resolve_tag
from relpack.services.manifest import save_manifest
from relpack.services.pipeline import BundleJob, bundle_all


def _parse_sources(values: list[str], ctx: CLIContext) -> dict[Platform, Path]:
    sources: dict[Platform, Path] = {}
    for value in values:
        platform_name, sep, raw_path = value.partition("=")
        if not sep or not raw_path:
            exit_user_error(ctx, f"--source expects PLATFORM=PATH, got {value!r}")
        platform = unwrap_or_exit(parse_platform(platform_name), ctx)
        if platform in sources:
            exit_user_error(ctx, f"--source given twice for {platform}")
        sources[platform] = Path(raw_path)
    return sources


def package(
    tag: str = typer.Option(..., "--tag", help="Release tag (e.g. v1.0.4)"),
    product: str | None = typer.Option(
        None, "--product", help="Product id (default: [product].name from config)"
    ),
    source: list[str] = typer.Option(
        ..., "--source", help="Build output as PLATFORM=PATH, repeatable"
    ),
    dist_dir: Path | None = typer.Option(
        None, "--dist-dir", help="Output directory (default: config or dist)"
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
    """Bundle every platform in parallel, then compose the release."""
    ctx = build_context()

    product_id = product or ctx.config.product.name
    if product_id is None:
        exit_user_error(ctx, "--product is required (or set [product].name in relpack.toml)")

    sources = _parse_sources(source, ctx)
    required = parse_platforms(platforms or ctx.config.release.platforms, ctx)
    directory = dist_dir if dist_dir is not None else Path(ctx.config.release.dist_dir)
    version = unwrap_or_exit(resolve_tag(tag), ctx)

    jobs: list[BundleJob] = []
    for platform, path in sources.items():
        name = unwrap_or_exit(artifact_name(product_id, version, platform), ctx)
        jobs.append(BundleJob(platform=platform, source=path, destination=directory / name))

    results = bundle_all(jobs, version=version)

    exit_code = 0
    artifacts: list[ArchiveArtifact] = []
    for job in jobs:
        result = results[job.platform]
        if isinstance(result, Err):
            print_release_error(result.error, ctx.console)
            exit_code = exit_code or release_error_exit_code(result.error)
            continue
        artifacts.append(result.value)
        ctx.console.success(f"{job.platform}: {result.value.filename}")

    if exit_code:
        raise typer.Exit(code=exit_code)

    release = unwrap_or_exit(compose(version, artifacts, required), ctx)
    ctx.console.success(release.title)

    if manifest is not None:
        out = unwrap_or_exit(save_manifest(release, manifest, product=product_id), ctx)
        ctx.console.print(f"manifest: {out}", Style.DIM)
