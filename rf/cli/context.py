from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from rf.core.config import CONFIG_FILE_NAME
from rf.core.errors import ErrorCode
from rf.core.result import Err
from rf.output.console import ConsoleProtocol, RichConsole
from rf.workflow.config import Config, load_config

CONFIG_ENV_VAR = "RF_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config_path: Path
    config: Config
    console: ConsoleProtocol


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd() / CONFIG_FILE_NAME


def build_context() -> CLIContext:
    path = config_path()
    result = load_config(path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        root=path.parent,
        config_path=path,
        config=result.value,
        console=RichConsole(),
    )
