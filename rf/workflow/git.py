"""Branch naming for issues and the SwitchBranches step."""

from __future__ import annotations

import re

from rf.core.result import Err, Ok, Result
from rf.platform.process import run as run_process
from rf.trackers.issue import GitHubIssue, Issue, JiraIssue
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import ExternalCallFailed, NoIssueSelected, StepError
from rf.workflow.mode import DryRun, Real, RunMode
from rf.workflow.state import Initial, IssueSelected, State

__all__ = ["branch_name_from_issue", "switch_branches"]

_GIT_TIMEOUT_SECONDS = 30.0
_NON_WORD = re.compile(r"[^\w]+")


def branch_name_from_issue(issue: Issue) -> str:
    """`<key or number>-<slug of summary or title>`, e.g. `PROJ-12-fix-login-page`."""
    match issue:
        case JiraIssue(key=key, summary=text):
            ident = key
        case GitHubIssue(number=number, title=text):
            ident = str(number)
    slug = _NON_WORD.sub("-", text).strip("-").lower()
    if not slug:
        return ident
    return f"{ident}-{slug}"


def _branch_exists(name: str, *, ctx: WorkflowContext) -> bool:
    result = run_process(
        ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{name}"],
        cwd=ctx.root,
        timeout=_GIT_TIMEOUT_SECONDS,
    )
    return isinstance(result, Ok)


def switch_branches(
    state: State, *, mode: RunMode, ctx: WorkflowContext
) -> Result[State, StepError]:
    """Check out the selected issue's branch, creating it if needed."""
    match state:
        case Initial():
            return Err(NoIssueSelected())
        case IssueSelected(issue=issue):
            name = branch_name_from_issue(issue)

    match mode:
        case DryRun(sink=sink):
            sink.preview(f"Would switch to branch {name}")
            return Ok(state)
        case Real():
            pass

    if _branch_exists(name, ctx=ctx):
        cmd = ["git", "switch", name]
    else:
        cmd = ["git", "switch", "-c", name]
    result = run_process(cmd, cwd=ctx.root, timeout=_GIT_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            ExternalCallFailed(
                operation="switch branches",
                message=str(result.error),
                hint=result.error.detail,
            )
        )
    ctx.console.success(f"Switched to branch {name}")
    return Ok(state)
