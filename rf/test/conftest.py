"""Shared fixtures for workflow tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rf.core.config import GitHubConfig, JiraConfig, TrackerConfig
from rf.output.console import MockConsole
from rf.trackers.http import MockHttpClient
from rf.trackers.prompt import MockPrompt
from rf.workflow.context import WorkflowContext

JIRA = JiraConfig(url="https://example.atlassian.net", project="PROJ")
GITHUB = GitHubConfig(owner="acme", repo="widgets")
TRACKERS = TrackerConfig(jira=JIRA, github=GITHUB)
JIRA_ENV = {"JIRA_USER": "dev@example.com", "JIRA_TOKEN": "secret"}


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def http() -> MockHttpClient:
    return MockHttpClient()


@pytest.fixture
def prompt() -> MockPrompt:
    return MockPrompt()


@pytest.fixture
def ctx(
    tmp_path: Path, console: MockConsole, http: MockHttpClient, prompt: MockPrompt
) -> WorkflowContext:
    return WorkflowContext(root=tmp_path, console=console, prompt=prompt, http=http, env=JIRA_ENV)


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """A project root whose Cargo.toml is at 1.2.3."""
    (tmp_path / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "1.2.3"\n\n[dependencies]\nserde = "1"\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def trackers() -> TrackerConfig:
    return TRACKERS


@pytest.fixture
def jira_config() -> JiraConfig:
    return JIRA
