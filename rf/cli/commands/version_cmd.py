from __future__ import annotations

from rf.cli.commands._helpers import exit_on_step_error
from rf.cli.context import config_path
from rf.core.result import Err
from rf.output.console import RichConsole
from rf.release.manifests import discover_version


def version() -> None:
    """Show the project version and the manifest it was read from."""
    console = RichConsole()
    found = discover_version(root=config_path().parent)
    if isinstance(found, Err):
        exit_on_step_error(found.error, console)
    console.print(f"{found.value} ({found.value.file_name})")
