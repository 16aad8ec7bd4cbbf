from __future__ import annotations

import os
from pathlib import Path

import typer

from relpack import __version__
from relpack.cli.commands.bundle_cmd import bundle
from relpack.cli.commands.compose_cmd import compose
from relpack.cli.commands.name_cmd import name
from relpack.cli.commands.package_cmd import package
from relpack.cli.commands.resolve_cmd import resolve
from relpack.cli.commands.verify_cmd import verify
from relpack.cli.context import CONFIG_ENV
from relpack.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(resolve)
app.command()(name)
app.command()(bundle)
app.command()(verify)
app.command()(compose)
app.command()(package)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ./relpack.toml if present)",
    ),
) -> None:
    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' is not a file", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[CONFIG_ENV] = str(path.resolve())


def main() -> None:
    app()
