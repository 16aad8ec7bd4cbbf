from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from relpack.cli.context import CLIContext
from relpack.core.config import Config
from relpack.core.errors import ErrorCode
from relpack.output.console import MockConsole
from relpack.platform.detection import Platform


def _patched(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import relpack.cli.commands.package_cmd as package_cmd

    console = MockConsole()
    ctx = CLIContext(config=Config(), host=Platform.LINUX, console=console)
    monkeypatch.setattr(package_cmd, "build_context", lambda: ctx)
    return console


def test_package_bundles_every_platform(
    win_binary: Path, mac_bundle: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    console = _patched(monkeypatch)
    dist = tmp_path / "dist"

    package_cmd.package(
        tag="v1.0.4",
        product="tape_delay",
        source=[f"windows={win_binary}", f"macos={mac_bundle}"],
        dist_dir=dist,
        platforms=None,
        manifest=dist / "manifest.json",
    )

    assert (dist / "tape_delay-v1.0.4-win64.zip").is_file()
    assert (dist / "tape_delay-v1.0.4-macos.zip").is_file()
    data = json.loads((dist / "manifest.json").read_text(encoding="utf-8"))
    assert data["tag"] == "v1.0.4"
    assert len(data["assets"]) == 2
    assert console.find("Release v1.0.4")


def test_one_failing_platform_keeps_the_other_archive(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    console = _patched(monkeypatch)
    dist = tmp_path / "dist"

    with pytest.raises(typer.Exit) as exc:
        package_cmd.package(
            tag="v1.0.4",
            product="tape_delay",
            source=[f"windows={win_binary}", f"macos={tmp_path / 'missing.vst3'}"],
            dist_dir=dist,
            platforms=None,
            manifest=None,
        )

    assert exc.value.exit_code == int(ErrorCode.SOURCE_MISSING)
    assert (dist / "tape_delay-v1.0.4-win64.zip").is_file()
    assert not (dist / "tape_delay-v1.0.4-macos.zip").exists()
    assert console.find("[bundle/macos]")
    assert console.find("OK windows: tape_delay-v1.0.4-win64.zip")


def test_missing_required_platform_is_incomplete(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    _patched(monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        package_cmd.package(
            tag="v1.0.4",
            product="tape_delay",
            source=[f"windows={win_binary}"],
            dist_dir=tmp_path / "dist",
            platforms=["windows", "macos"],
            manifest=None,
        )

    assert exc.value.exit_code == int(ErrorCode.INCOMPLETE_RELEASE)


@pytest.mark.parametrize(
    ("value", "code"),
    [
        ("windows", ErrorCode.USER_ERROR),
        ("windows=", ErrorCode.USER_ERROR),
        ("=build/x.vst3", ErrorCode.UNKNOWN_PLATFORM),
    ],
)
def test_malformed_source(
    value: str, code: ErrorCode, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    console = _patched(monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        package_cmd.package(
            tag="v1.0.4",
            product="tape_delay",
            source=[value],
            dist_dir=tmp_path,
            platforms=None,
            manifest=None,
        )

    assert exc.value.exit_code == int(code)
    assert console.has_error()


def test_duplicate_source_platform(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    console = _patched(monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        package_cmd.package(
            tag="v1.0.4",
            product="tape_delay",
            source=["windows=a.vst3", "windows-x64=b.vst3"],
            dist_dir=tmp_path,
            platforms=None,
            manifest=None,
        )

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.find("given twice")


def test_unwritable_manifest_exits_with_write_error(
    win_binary: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relpack.cli.commands.package_cmd as package_cmd

    console = _patched(monkeypatch)
    dist = tmp_path / "dist"
    occupied = tmp_path / "manifest.json"
    occupied.mkdir()

    with pytest.raises(typer.Exit) as exc:
        package_cmd.package(
            tag="v1.0.4",
            product="tape_delay",
            source=[f"windows={win_binary}"],
            dist_dir=dist,
            platforms=["windows"],
            manifest=occupied,
        )

    assert exc.value.exit_code == int(ErrorCode.WRITE_ERROR)
    assert (dist / "tape_delay-v1.0.4-win64.zip").is_file()
    assert console.find("[compose] cannot write manifest")
