"""Subprocess execution returning `Result` instead of raising.

- `run` captures output. Used for `git` and `gh`, whose stdout is parsed.
- `run_shell` hands an already templated command line to the system shell and
  lets its output stream to the terminal. Used by the Command step.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rf.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_shell"]

NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A process that could not start, timed out, or exited non-zero.

    `returncode` is NOT_STARTED when there is no exit status.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def detail(self) -> str | None:
        """Trimmed stderr, or None when the process printed nothing there."""
        return self.stderr.strip() or None

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd` and return its stdout on exit status 0."""
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            argv,
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(argv, NOT_STARTED, stderr=f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(argv, NOT_STARTED, stderr=str(e)))

    if proc.returncode:
        return Err(ProcessError(argv, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)


def run_shell(command: str, cwd: Path) -> Result[None, ProcessError]:
    """Run `command` through the shell with inherited stdio. No timeout."""
    try:
        returncode = subprocess.call(command, cwd=cwd, shell=True)
    except OSError as e:
        return Err(ProcessError((command,), NOT_STARTED, stderr=str(e)))

    if returncode:
        return Err(ProcessError((command,), returncode))
    return Ok(None)
