from __future__ import annotations

import sys

import pytest

from relpack.platform.detection import Platform, detect_platform, is_windows


def test_platform_str() -> None:
    assert str(Platform.WINDOWS) == "windows"
    assert str(Platform.MACOS) == "macos"
    assert str(Platform.LINUX) == "linux"


def test_is_unix() -> None:
    assert Platform.MACOS.is_unix
    assert Platform.LINUX.is_unix
    assert not Platform.WINDOWS.is_unix


def test_detect_platform_matches_sys_platform() -> None:
    expected = {
        "linux": Platform.LINUX,
        "darwin": Platform.MACOS,
        "win32": Platform.WINDOWS,
    }.get(sys.platform)
    if expected is None:
        pytest.skip(f"unrecognised host {sys.platform}")
    assert detect_platform() == expected
    assert is_windows() == (expected == Platform.WINDOWS)


def test_detect_platform_unknown_host(monkeypatch: pytest.MonkeyPatch) -> None:
    import relpack.platform.detection as detection

    detection.detect_platform.cache_clear()
    monkeypatch.setattr(detection._sys, "platform", "haiku1")
    try:
        assert detection.detect_platform() is None
    finally:
        detection.detect_platform.cache_clear()
