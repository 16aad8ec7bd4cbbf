from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relpack.core.config import DEFAULT_CONFIG_NAME, Config, load_config, load_config_or_default
from relpack.core.errors import ErrorCode
from relpack.core.result import Err
from relpack.output.console import ConsoleProtocol, RichConsole
from relpack.platform.detection import Platform, detect_platform

CONFIG_ENV = "RELPACK_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    host: Platform | None
    console: ConsoleProtocol


def build_context() -> CLIContext:
    """Load config (``--config``, else ./relpack.toml if present) and a console."""
    console = RichConsole()

    explicit = os.environ.get(CONFIG_ENV)
    if explicit:
        config_result = load_config(Path(explicit))
    else:
        config_result = load_config_or_default(Path.cwd() / DEFAULT_CONFIG_NAME)

    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        config=config_result.value,
        host=detect_platform(),
        console=console,
    )
