from __future__ import annotations

import pytest

from relpack.core.result import Err, Ok
from relpack.release.errors import InvalidTagFormat, Stage
from relpack.release.semver import Version, parse_version, resolve_tag


def test_resolve_stable_tag() -> None:
    assert resolve_tag("v1.2.3") == Ok(Version(1, 2, 3))
    assert resolve_tag("v0.0.1") == Ok(Version(0, 0, 1))


def test_resolve_prerelease_and_build() -> None:
    assert resolve_tag("v2.0.0-beta.1") == Ok(Version(2, 0, 0, prerelease="beta.1"))
    assert resolve_tag("v1.0.0+build.5") == Ok(Version(1, 0, 0, build="build.5"))
    assert resolve_tag("v1.0.0-rc.1+exp.sha.5114f85") == Ok(
        Version(1, 0, 0, prerelease="rc.1", build="exp.sha.5114f85")
    )


@pytest.mark.parametrize(
    "tag",
    [
        "v1.2.3",
        "v0.0.0",
        "v10.20.30",
        "v1.0.4",
        "v2.0.0-beta.1",
        "v1.0.0-alpha",
        "v1.0.0-0.3.7",
        "v1.0.0-x-y-z.--",
        "v1.0.0+20130313144700",
        "v1.0.0-beta+exp.sha.5114f85",
    ],
)
def test_resolve_roundtrips_to_the_original_tag(tag: str) -> None:
    result = resolve_tag(tag)
    assert isinstance(result, Ok)
    assert result.value.to_tag() == tag
    assert str(result.value) == tag[1:]


@pytest.mark.parametrize("tag", ["V1.2.3", "1.2.3", "", " v1.2.3", "release-1.2.3"])
def test_resolve_requires_lowercase_v_prefix(tag: str) -> None:
    result = resolve_tag(tag)
    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidTagFormat)
    assert result.error.tag == tag


def test_capital_v_reason_mentions_case() -> None:
    result = resolve_tag("V1.2.3")
    assert isinstance(result, Err)
    assert "lowercase" in result.error.reason


@pytest.mark.parametrize(
    ("tag", "reason_fragment"),
    [
        ("v", "segment"),
        ("v1.2", "expected major.minor.patch"),
        ("v1.2.3.4", "expected major.minor.patch"),
        ("va.b.c", "not numeric"),
        ("v1.x.3", "not numeric"),
        ("v01.2.3", "leading zero"),
        ("v1.2.3-", "suffix"),
        ("v1.2.3-01", "suffix"),
        ("v1.2.3+", "suffix"),
        ("v1.2.3-beta..1", "suffix"),
    ],
)
def test_resolve_rejects_invalid_semver(tag: str, reason_fragment: str) -> None:
    result = resolve_tag(tag)
    assert isinstance(result, Err)
    assert reason_fragment in result.error.reason
    assert result.error.stage == Stage.RESOLVE


def test_resolve_strips_only_one_v() -> None:
    assert isinstance(resolve_tag("vv1.2.3"), Err)


def test_trailing_newline_is_not_accepted() -> None:
    assert isinstance(resolve_tag("v1.2.3\n"), Err)


def test_parse_version_without_prefix() -> None:
    assert parse_version("1.2.3") == Version(1, 2, 3)
    assert parse_version("v1.2.3") is None


def test_precedence_follows_semver() -> None:
    ordered = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
        "1.0.1",
        "1.1.0",
        "2.0.0",
    ]
    versions = [parse_version(v) for v in ordered]
    assert all(v is not None for v in versions)
    shuffled = list(reversed(versions))
    assert sorted(shuffled) == versions  # type: ignore[type-var]


def test_build_metadata_does_not_affect_precedence() -> None:
    a = Version(1, 0, 0, build="a")
    b = Version(1, 0, 0, build="b")
    assert not a < b
    assert not b < a


def test_is_prerelease() -> None:
    assert Version(1, 0, 0, prerelease="beta.1").is_prerelease
    assert not Version(1, 0, 0).is_prerelease
