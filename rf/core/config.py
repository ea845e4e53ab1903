"""Typed configuration loading for rf.toml.

This module owns the TOML boundary and the issue tracker tables. Workflow
definitions are parsed by `rf.workflow.config` on top of these primitives.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "GitHubConfig",
    "JiraConfig",
    "TrackerConfig",
    "parse_toml",
    "parse_trackers",
]

CONFIG_FILE_NAME = "rf.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class JiraConfig:
    """Jira Cloud site and the project issues are selected from."""

    url: str
    project: str

    @property
    def api_base(self) -> str:
        return f"{self.url.rstrip('/')}/rest/api/3"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Issue trackers available to a workflow. Either may be absent."""

    jira: JiraConfig | None = None
    github: GitHubConfig | None = None


def parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, mapping read and syntax failures to ConfigError."""
    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config {path}: {e.strerror or e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _required(table: Mapping[str, object], key: str, *, section: str) -> Result[str, ConfigError]:
    value = get_str(table, key)
    if value is None:
        return Err(ConfigError(f"[{section}] requires a non-empty '{key}'"))
    return Ok(value)


def parse_trackers(data: Mapping[str, object]) -> Result[TrackerConfig, ConfigError]:
    """Read the optional [jira] and [github] tables."""
    jira: JiraConfig | None = None
    github: GitHubConfig | None = None

    jira_table = get_table(data, "jira")
    if jira_table is not None:
        url = _required(jira_table, "url", section="jira")
        if isinstance(url, Err):
            return url
        project = _required(jira_table, "project", section="jira")
        if isinstance(project, Err):
            return project
        jira = JiraConfig(url=url.value, project=project.value)
    elif "jira" in data:
        return Err(ConfigError("[jira] must be a table"))

    github_table = get_table(data, "github")
    if github_table is not None:
        owner = _required(github_table, "owner", section="github")
        if isinstance(owner, Err):
            return owner
        repo = _required(github_table, "repo", section="github")
        if isinstance(repo, Err):
            return repo
        github = GitHubConfig(owner=owner.value, repo=repo.value)
    elif "github" in data:
        return Err(ConfigError("[github] must be a table"))

    return Ok(TrackerConfig(jira=jira, github=github))

