"""Command step: template a shell command from workflow state, then run it.

Declared variables map a literal token in the command to one of two values:

    command = "git tag v$version && git push origin $branch"
    variables = {"$version": Variable.VERSION, "$branch": Variable.ISSUE_BRANCH}

All variables are resolved before anything is substituted, and substitution
is a single pass over the original template, so a resolved value is never
scanned for other tokens.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from rf.core.result import Err, Ok, Result
from rf.platform.process import run_shell
from rf.release.manifests import discover_version
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import CommandFailed, NoIssueSelected, StepError
from rf.workflow.git import branch_name_from_issue
from rf.workflow.mode import DryRun, Real, RunMode
from rf.workflow.state import Initial, IssueSelected, State

__all__ = ["Variable", "replace_variables", "run_command"]


class Variable(Enum):
    VERSION = "Version"
    """First supported manifest version found in the project."""

    ISSUE_BRANCH = "IssueBranch"
    """Branch name of the selected issue; requires `IssueSelected`."""


def _resolve(variable: Variable, state: State, *, root: Path) -> Result[str, StepError]:
    match variable:
        case Variable.VERSION:
            found = discover_version(root=root)
            if isinstance(found, Err):
                return found
            return Ok(str(found.value))
        case Variable.ISSUE_BRANCH:
            match state:
                case Initial():
                    return Err(NoIssueSelected())
                case IssueSelected(issue=issue):
                    return Ok(branch_name_from_issue(issue))
    raise AssertionError(f"unexpected variable: {variable!r}")


def replace_variables(
    command: str,
    variables: Mapping[str, Variable],
    state: State,
    *,
    root: Path,
) -> Result[str, StepError]:
    """Substitute every declared token in `command` with its resolved value."""
    values: dict[str, str] = {}
    for token, variable in variables.items():
        resolved = _resolve(variable, state, root=root)
        if isinstance(resolved, Err):
            return resolved
        values[token] = resolved.value

    tokens = sorted((t for t in values if t), key=len, reverse=True)
    if not tokens:
        return Ok(command)
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return Ok(pattern.sub(lambda m: values[m.group(0)], command))


def run_command(
    state: State,
    command: str,
    variables: Mapping[str, Variable] | None,
    *,
    mode: RunMode,
    ctx: WorkflowContext,
) -> Result[State, StepError]:
    """Run `command` in the project root after templating it.

    Returns the state unchanged on success. Dry-run reports "Would run ..."
    and spawns nothing.
    """
    if variables:
        replaced = replace_variables(command, variables, state, root=ctx.root)
        if isinstance(replaced, Err):
            return replaced
        command = replaced.value

    match mode:
        case DryRun(sink=sink):
            sink.preview(f"Would run {command}")
            return Ok(state)
        case Real():
            ctx.console.print(f"$ {command}")
            ran = run_shell(command, cwd=ctx.root)
            if isinstance(ran, Err):
                return Err(CommandFailed(command=command, returncode=ran.error.returncode))
            return Ok(state)
    raise AssertionError(f"unexpected run mode: {mode!r}")
