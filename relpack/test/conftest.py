from __future__ import annotations

import os
from pathlib import Path

import pytest


def make_mac_bundle(root: Path, name: str = "tape_delay") -> Path:
    """Create a minimal .vst3 bundle with an executable binary and two links."""
    bundle = root / f"{name}.vst3"
    contents = bundle / "Contents"
    macos = contents / "MacOS"
    macos.mkdir(parents=True)
    (contents / "Info.plist").write_text("<plist version='1.0'/>\n", encoding="utf-8")
    (contents / "PkgInfo").write_text("BNDL????", encoding="utf-8")
    (contents / "Resources").mkdir()
    (contents / "Resources" / "knob.png").write_bytes(b"\x89PNG fake")

    binary = macos / name
    binary.write_bytes(b"\xcf\xfa\xed\xfe fat binary")
    binary.chmod(0o755)

    os.symlink(name, macos / "current")
    os.symlink("Resources", contents / "Shared")
    return bundle


def make_win_binary(root: Path, name: str = "tape_delay") -> Path:
    root.mkdir(parents=True, exist_ok=True)
    binary = root / f"{name}.vst3"
    binary.write_bytes(b"MZ\x90\x00 renamed dll")
    return binary


@pytest.fixture
def mac_bundle(tmp_path: Path) -> Path:
    if os.name == "nt":
        pytest.skip("needs POSIX modes and symlinks")
    return make_mac_bundle(tmp_path / "build" / "macos")


@pytest.fixture
def win_binary(tmp_path: Path) -> Path:
    return make_win_binary(tmp_path / "build" / "windows")
