"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from relpack.core.errors import ErrorCode
from relpack.core.result import Err, Result
from relpack.output.errors import print_release_error, release_error_exit_code
from relpack.platform.detection import Platform
from relpack.release.errors import ReleaseError
from relpack.release.platforms import parse_platform

if TYPE_CHECKING:
    from relpack.cli.context import CLIContext


def unwrap_or_exit[T](result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))
    return result.value


def parse_platforms(names: list[str] | tuple[str, ...], ctx: CLIContext) -> list[Platform]:
    """Parse platform names, exiting on the first unknown one."""
    platforms: list[Platform] = []
    for name in names:
        platform = unwrap_or_exit(parse_platform(name), ctx)
        if platform not in platforms:
            platforms.append(platform)
    return platforms


def exit_user_error(ctx: CLIContext, message: str) -> NoReturn:
    ctx.console.error(message)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))
