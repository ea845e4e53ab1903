from __future__ import annotations

from pathlib import Path

import pytest

from rf.core.config import TrackerConfig
from rf.core.result import Err, Ok, Result
from rf.output.console import MockConsole
from rf.platform.process import ProcessError
from rf.trackers.issue import GitHubIssue, JiraIssue
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import ExternalCallFailed, NoIssueSelected
from rf.workflow.git import branch_name_from_issue, switch_branches
from rf.workflow.mode import DryRun, Real
from rf.workflow.state import IssueSelected, initial_state


class FakeGit:
    def __init__(self, *, existing: set[str], fail_switch: bool = False) -> None:
        self.existing = existing
        self.fail_switch = fail_switch
        self.calls: list[list[str]] = []

    def __call__(
        self, cmd: list[str], cwd: Path, env: object = None, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd)
        if cmd[1] == "rev-parse":
            if cmd[-1].removeprefix("refs/heads/") in self.existing:
                return Ok("abc123\n")
            return Err(ProcessError(tuple(cmd), 1, "", ""))
        if self.fail_switch:
            return Err(ProcessError(tuple(cmd), 128, "", "fatal: invalid reference\n"))
        return Ok("")


class TestBranchName:
    def test_jira_issue(self) -> None:
        issue = JiraIssue(key="PROJ-12", summary="Fix the Login page!")
        assert branch_name_from_issue(issue) == "PROJ-12-fix-the-login-page"

    def test_github_issue(self) -> None:
        issue = GitHubIssue(number=42, title="  crash: on [start] ")
        assert branch_name_from_issue(issue) == "42-crash-on-start"

    def test_empty_slug(self) -> None:
        assert branch_name_from_issue(GitHubIssue(number=5, title="???")) == "5"


class TestSwitchBranches:
    def test_requires_selected_issue(self, trackers: TrackerConfig, ctx: WorkflowContext) -> None:
        assert switch_branches(initial_state(trackers), mode=Real(), ctx=ctx) == Err(
            NoIssueSelected()
        )

    def test_dry_run_previews(
        self,
        monkeypatch: pytest.MonkeyPatch,
        trackers: TrackerConfig,
        console: MockConsole,
        ctx: WorkflowContext,
    ) -> None:
        git = FakeGit(existing=set())
        monkeypatch.setattr("rf.workflow.git.run_process", git)
        state = IssueSelected(trackers=trackers, issue=GitHubIssue(number=3, title="Docs"))

        result = switch_branches(state, mode=DryRun(sink=console), ctx=ctx)

        assert result == Ok(state)
        assert console.previews == ["Would switch to branch 3-docs"]
        assert git.calls == []

    def test_creates_missing_branch(
        self, monkeypatch: pytest.MonkeyPatch, trackers: TrackerConfig, ctx: WorkflowContext
    ) -> None:
        git = FakeGit(existing=set())
        monkeypatch.setattr("rf.workflow.git.run_process", git)
        state = IssueSelected(trackers=trackers, issue=GitHubIssue(number=3, title="Docs"))

        result = switch_branches(state, mode=Real(), ctx=ctx)

        assert result == Ok(state)
        assert git.calls[-1] == ["git", "switch", "-c", "3-docs"]

    def test_switches_to_existing_branch(
        self, monkeypatch: pytest.MonkeyPatch, trackers: TrackerConfig, ctx: WorkflowContext
    ) -> None:
        git = FakeGit(existing={"3-docs"})
        monkeypatch.setattr("rf.workflow.git.run_process", git)
        state = IssueSelected(trackers=trackers, issue=GitHubIssue(number=3, title="Docs"))

        switch_branches(state, mode=Real(), ctx=ctx)

        assert git.calls[-1] == ["git", "switch", "3-docs"]

    def test_git_failure(
        self, monkeypatch: pytest.MonkeyPatch, trackers: TrackerConfig, ctx: WorkflowContext
    ) -> None:
        git = FakeGit(existing=set(), fail_switch=True)
        monkeypatch.setattr("rf.workflow.git.run_process", git)
        state = IssueSelected(trackers=trackers, issue=GitHubIssue(number=3, title="Docs"))

        result = switch_branches(state, mode=Real(), ctx=ctx)

        assert isinstance(result, Err)
        assert isinstance(result.error, ExternalCallFailed)
        assert result.error.hint == "fatal: invalid reference"
