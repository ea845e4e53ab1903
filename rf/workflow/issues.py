"""Issue selection and status transitions."""

from __future__ import annotations

from dataclasses import dataclass

from rf.core.result import Err, Ok, Result
from rf.trackers import github, jira
from rf.trackers.errors import TrackerError
from rf.trackers.issue import GitHubIssue, Issue, JiraIssue
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import (
    IssueAlreadySelected,
    NoIssueSelected,
    StepError,
    TrackerNotConfigured,
    UnsupportedTrackerOperation,
    from_tracker,
)
from rf.workflow.mode import DryRun, Real, RunMode
from rf.workflow.state import Initial, IssueSelected, State

__all__ = [
    "GitHubSource",
    "IssueSource",
    "JiraSource",
    "select_issue",
    "transition_issue_status",
]


@dataclass(frozen=True, slots=True)
class JiraSource:
    """Jira issues of the configured project in `status`."""

    status: str


@dataclass(frozen=True, slots=True)
class GitHubSource:
    """Open GitHub issues, optionally filtered by labels."""

    labels: tuple[str, ...] = ()


IssueSource = JiraSource | GitHubSource


def _choose(
    issues: list[Issue], *, ctx: WorkflowContext, operation: str
) -> Result[Issue, StepError]:
    if not issues:
        return Err(from_tracker(operation, TrackerError(message="no matching issues found")))
    chosen = ctx.prompt.select(issues, "Select an Issue")
    if isinstance(chosen, Err):
        return Err(from_tracker(operation, chosen.error))
    ctx.console.print(f"Selected item : {chosen.value}")
    return Ok(chosen.value)


def _select_from(
    state: Initial, source: IssueSource, *, ctx: WorkflowContext
) -> Result[IssueSelected, StepError]:
    match source:
        case JiraSource(status=status):
            config = state.trackers.jira
            if config is None:
                return Err(TrackerNotConfigured(tracker="Jira"))
            credentials = jira.jira_credentials(ctx.env)
            if isinstance(credentials, Err):
                return Err(from_tracker("select Jira issue", credentials.error))
            listed = jira.list_issues(config, status, http=ctx.http, credentials=credentials.value)
            if isinstance(listed, Err):
                return Err(from_tracker("select Jira issue", listed.error))
            chosen = _choose(list(listed.value), ctx=ctx, operation="select Jira issue")
            if isinstance(chosen, Err):
                return chosen
            return Ok(
                IssueSelected(
                    trackers=state.trackers,
                    issue=chosen.value,
                    github=state.github,
                    release=state.release,
                )
            )

        case GitHubSource(labels=labels):
            config = state.trackers.github
            if config is None:
                return Err(TrackerNotConfigured(tracker="GitHub"))
            listed = github.list_issues(config, state.github, labels, root=ctx.root)
            if isinstance(listed, Err):
                return Err(from_tracker("select GitHub issue", listed.error))
            session, issues = listed.value
            chosen = _choose(list(issues), ctx=ctx, operation="select GitHub issue")
            if isinstance(chosen, Err):
                return chosen
            return Ok(
                IssueSelected(
                    trackers=state.trackers,
                    issue=chosen.value,
                    github=session,
                    release=state.release,
                )
            )
    raise AssertionError(f"unexpected issue source: {source!r}")


def select_issue(
    state: State, source: IssueSource, *, ctx: WorkflowContext
) -> Result[State, StepError]:
    """Query the tracker, let the user pick one issue, and move to `IssueSelected`.

    Valid only from `Initial`. Selection only reads from the tracker, so it
    runs the same way in dry-run mode.
    """
    match state:
        case IssueSelected(issue=issue):
            return Err(IssueAlreadySelected(issue=str(issue)))
        case Initial():
            selected = _select_from(state, source, ctx=ctx)
            if isinstance(selected, Err):
                return selected
            return Ok(selected.value)
    raise AssertionError(f"unexpected workflow state: {state!r}")


def transition_issue_status(
    state: State, status: str, *, mode: RunMode, ctx: WorkflowContext
) -> Result[State, StepError]:
    """Move the selected Jira issue to `status`. GitHub issues have no status."""
    match state:
        case Initial():
            return Err(NoIssueSelected())
        case IssueSelected(issue=GitHubIssue()):
            return Err(UnsupportedTrackerOperation(tracker="GitHub", operation="transition issue"))
        case IssueSelected(issue=JiraIssue(key=key)):
            config = state.trackers.jira
            if config is None:
                return Err(TrackerNotConfigured(tracker="Jira"))

            match mode:
                case DryRun(sink=sink):
                    sink.preview(f"Would transition {key} to {status}")
                    return Ok(state)
                case Real():
                    pass

            credentials = jira.jira_credentials(ctx.env)
            if isinstance(credentials, Err):
                return Err(from_tracker("transition Jira issue", credentials.error))
            moved = jira.transition_issue(
                config, key, status, http=ctx.http, credentials=credentials.value
            )
            if isinstance(moved, Err):
                return Err(from_tracker("transition Jira issue", moved.error))
            ctx.console.success(f"{key} transitioned to {status}")
            return Ok(state)
    raise AssertionError(f"unexpected workflow state: {state!r}")
