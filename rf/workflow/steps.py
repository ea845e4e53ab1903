"""Workflow steps and the sequential driver."""

from __future__ import annotations

from dataclasses import dataclass, field

from rf.core.result import Err, Ok, Result
from rf.release.semver import Rule
from rf.workflow.command import Variable, run_command
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import StepError
from rf.workflow.git import switch_branches
from rf.workflow.issues import GitHubSource, JiraSource, select_issue, transition_issue_status
from rf.workflow.mode import RunMode
from rf.workflow.releases import bump_version
from rf.workflow.state import State

__all__ = [
    "BumpVersion",
    "Command",
    "SelectGitHubIssue",
    "SelectJiraIssue",
    "Step",
    "SwitchBranches",
    "TransitionJiraIssue",
    "Workflow",
    "run_step",
    "run_workflow",
    "step_name",
]


@dataclass(frozen=True, slots=True)
class SelectJiraIssue:
    status: str


@dataclass(frozen=True, slots=True)
class SelectGitHubIssue:
    labels: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TransitionJiraIssue:
    status: str


@dataclass(frozen=True, slots=True)
class SwitchBranches:
    pass


@dataclass(frozen=True, slots=True)
class BumpVersion:
    rule: Rule


@dataclass(frozen=True, slots=True)
class Command:
    command: str
    variables: dict[str, Variable] = field(default_factory=dict)


Step = (
    SelectJiraIssue
    | SelectGitHubIssue
    | TransitionJiraIssue
    | SwitchBranches
    | BumpVersion
    | Command
)


@dataclass(frozen=True, slots=True)
class Workflow:
    name: str
    steps: tuple[Step, ...]


def step_name(step: Step) -> str:
    return type(step).__name__


def run_step(
    state: State, step: Step, *, mode: RunMode, ctx: WorkflowContext
) -> Result[State, StepError]:
    match step:
        case SelectJiraIssue(status=status):
            return select_issue(state, JiraSource(status=status), ctx=ctx)
        case SelectGitHubIssue(labels=labels):
            return select_issue(state, GitHubSource(labels=labels), ctx=ctx)
        case TransitionJiraIssue(status=status):
            return transition_issue_status(state, status, mode=mode, ctx=ctx)
        case SwitchBranches():
            return switch_branches(state, mode=mode, ctx=ctx)
        case BumpVersion(rule=rule):
            return bump_version(state, rule, mode=mode, ctx=ctx)
        case Command(command=command, variables=variables):
            return run_command(state, command, variables, mode=mode, ctx=ctx)
    raise AssertionError(f"unexpected step: {step!r}")


def run_workflow(
    workflow: Workflow, state: State, *, mode: RunMode, ctx: WorkflowContext
) -> Result[State, StepError]:
    """Run steps in order, threading the state. The first error aborts the run."""
    current = state
    total = len(workflow.steps)

    for index, step in enumerate(workflow.steps, start=1):
        ctx.console.header(f"[{index}/{total}] {step_name(step)}")
        outcome = run_step(current, step, mode=mode, ctx=ctx)
        if isinstance(outcome, Err):
            return outcome
        current = outcome.value

    return Ok(current)
