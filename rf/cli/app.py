from __future__ import annotations

import os
from pathlib import Path

import typer

from rf import __version__
from rf.cli.commands.list_cmd import list_workflows, validate
from rf.cli.commands.run_cmd import run
from rf.cli.commands.version_cmd import version
from rf.cli.context import CONFIG_ENV_VAR
from rf.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(run)
app.command("list")(list_workflows)
app.command()(validate)
app.command()(version)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(False, "--version", help="Show rf version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to rf.toml (defaults to ./rf.toml)",
    ),
) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        try:
            path = config.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --config: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

        os.environ[CONFIG_ENV_VAR] = str(path)


def main() -> None:
    app()
