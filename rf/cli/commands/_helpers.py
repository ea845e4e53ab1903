"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from rf.output.console import ConsoleProtocol
from rf.output.errors import print_step_error, step_error_exit_code
from rf.workflow.errors import StepError


def exit_on_step_error(error: StepError, console: ConsoleProtocol) -> NoReturn:
    """Report a failed step and exit with the code for its error kind."""
    print_step_error(error, console)
    raise typer.Exit(code=step_error_exit_code(error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
