from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from relpack.cli.context import CLIContext
from relpack.core.config import Config, ProductConfig, ReleaseConfig
from relpack.core.errors import ErrorCode
from relpack.output.console import MockConsole
from relpack.platform.detection import Platform
from relpack.services.pipeline import package


def _ctx(config: Config | None = None) -> CLIContext:
    return CLIContext(config=config or Config(), host=Platform.LINUX, console=MockConsole())


def _bundle_windows(win_binary: Path, dist: Path) -> None:
    package(
        tag="v1.0.4",
        product="tape_delay",
        platform=Platform.WINDOWS,
        source=win_binary,
        dest_dir=dist,
    ).unwrap()


def test_compose_writes_manifest(
    win_binary: Path, mac_bundle: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.compose_cmd as compose_cmd

    ctx = _ctx()
    monkeypatch.setattr(compose_cmd, "build_context", lambda: ctx)
    dist = tmp_path / "dist"
    _bundle_windows(win_binary, dist)
    package(
        tag="v1.0.4",
        product="tape_delay",
        platform=Platform.MACOS,
        source=mac_bundle,
        dest_dir=dist,
    ).unwrap()

    compose_cmd.compose(
        tag="v1.0.4",
        product="tape_delay",
        dist_dir=dist,
        platforms=None,
        manifest=dist / "manifest.json",
    )

    data = json.loads((dist / "manifest.json").read_text(encoding="utf-8"))
    assert [a["filename"] for a in data["assets"]] == [
        "tape_delay-v1.0.4-macos.zip",
        "tape_delay-v1.0.4-win64.zip",
    ]
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("Release v1.0.4")


def test_compose_incomplete_release_exits(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.compose_cmd as compose_cmd

    ctx = _ctx()
    monkeypatch.setattr(compose_cmd, "build_context", lambda: ctx)
    dist = tmp_path / "dist"
    _bundle_windows(win_binary, dist)

    with pytest.raises(typer.Exit) as exc:
        compose_cmd.compose(
            tag="v1.0.4",
            product="tape_delay",
            dist_dir=dist,
            platforms=["windows", "macos"],
            manifest=dist / "manifest.json",
        )

    assert exc.value.exit_code == int(ErrorCode.INCOMPLETE_RELEASE)
    assert not (dist / "manifest.json").exists()
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("[compose]")


def test_compose_uses_config_defaults(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.compose_cmd as compose_cmd

    dist = tmp_path / "artifacts"
    config = Config(
        product=ProductConfig(name="tape_delay"),
        release=ReleaseConfig(platforms=("windows",), dist_dir=str(dist)),
    )
    ctx = _ctx(config)
    monkeypatch.setattr(compose_cmd, "build_context", lambda: ctx)
    _bundle_windows(win_binary, dist)

    compose_cmd.compose(tag="v1.0.4", product=None, dist_dir=None, platforms=None, manifest=None)

    assert isinstance(ctx.console, MockConsole)
    assert not ctx.console.has_error()


def test_compose_requires_product(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relpack.cli.commands.compose_cmd as compose_cmd

    monkeypatch.setattr(compose_cmd, "build_context", lambda: _ctx())

    with pytest.raises(typer.Exit) as exc:
        compose_cmd.compose(
            tag="v1.0.4", product=None, dist_dir=tmp_path, platforms=None, manifest=None
        )

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_unwritable_manifest_is_a_staged_write_error(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.compose_cmd as compose_cmd

    ctx = _ctx()
    monkeypatch.setattr(compose_cmd, "build_context", lambda: ctx)
    dist = tmp_path / "dist"
    _bundle_windows(win_binary, dist)
    occupied = dist / "manifest.json"
    occupied.mkdir()

    with pytest.raises(typer.Exit) as exc:
        compose_cmd.compose(
            tag="v1.0.4",
            product="tape_delay",
            dist_dir=dist,
            platforms=["windows"],
            manifest=occupied,
        )

    assert exc.value.exit_code == int(ErrorCode.WRITE_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("[compose] cannot write manifest")
