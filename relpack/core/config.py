"""Typed configuration loading.

An optional ``relpack.toml`` supplies defaults for the CLI:

    [product]
    name = "tape_delay"

    [release]
    platforms = ["windows", "macos"]
    dist_dir = "dist"

Command-line flags always win over values from the file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_DIST_DIR",
    "DEFAULT_PLATFORMS",
    "ProductConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_NAME = "relpack.toml"
DEFAULT_DIST_DIR = "dist"
DEFAULT_PLATFORMS: tuple[str, ...] = ("windows", "macos")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ProductConfig:
    name: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Which platforms make a complete release and where archives live."""

    platforms: tuple[str, ...] = DEFAULT_PLATFORMS
    dist_dir: str = DEFAULT_DIST_DIR


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    product: ProductConfig = field(default_factory=ProductConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        product: StrDict = get_table(data, "product") or {}
        release: StrDict = get_table(data, "release") or {}
        platforms = get_str_list(release, "platforms")

        return cls(
            product=ProductConfig(name=get_str(product, "name")),
            release=ReleaseConfig(
                platforms=DEFAULT_PLATFORMS if platforms is None else platforms,
                dist_dir=get_str(release, "dist_dir") or DEFAULT_DIST_DIR,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relpack.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the defaults.

    A file that exists and is broken is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
