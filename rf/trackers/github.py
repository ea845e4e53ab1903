"""GitHub issues through the GitHub CLI (`gh`).

Authentication is delegated to `gh auth`; the first successful check is kept
in the workflow state as a `GitHubAuthenticated` session so later steps skip it.
"""

from __future__ import annotations

import json
import shutil
import urllib.parse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rf.core.config import GitHubConfig
from rf.core.result import Err, Ok, Result
from rf.core.structured import as_obj_list, as_str_dict, get_str
from rf.platform.process import run as run_process
from rf.trackers.errors import TrackerError
from rf.trackers.issue import GitHubIssue

__all__ = [
    "GitHubAuthenticated",
    "GitHubNew",
    "GitHubSession",
    "ensure_session",
    "issues_endpoint",
    "list_issues",
]

GH_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class GitHubNew:
    """No `gh` check has happened in this workflow run yet."""


@dataclass(frozen=True, slots=True)
class GitHubAuthenticated:
    login: str


GitHubSession = GitHubNew | GitHubAuthenticated


def _gh(cmd: list[str], *, root: Path, message: str) -> Result[str, TrackerError]:
    result = run_process(["gh", *cmd], cwd=root, timeout=GH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(TrackerError(message=message, hint=result.error.detail))
    return Ok(result.value)


def _gh_json(
    endpoint: str, *, root: Path, paginate: bool = False
) -> Result[object, TrackerError]:
    """Decoded `gh api` output.

    With `paginate`, every page is fetched and the result is a list holding
    one decoded page per entry (`--paginate --slurp`).
    """
    flags = ["--paginate", "--slurp"] if paginate else []
    out = _gh(["api", *flags, endpoint], root=root, message=f"gh api failed: {endpoint}")
    if isinstance(out, Err):
        return out
    try:
        obj: object = json.loads(out.value)
    except json.JSONDecodeError as e:
        return Err(TrackerError(message=f"gh api returned invalid JSON: {e}", hint=endpoint))
    return Ok(obj)


def ensure_session(
    session: GitHubSession, *, root: Path
) -> Result[GitHubAuthenticated, TrackerError]:
    if isinstance(session, GitHubAuthenticated):
        return Ok(session)

    if shutil.which("gh") is None:
        return Err(
            TrackerError(message="gh: missing", hint="Install GitHub CLI: https://cli.github.com/")
        )

    status = _gh(["auth", "status"], root=root, message="gh auth required")
    if isinstance(status, Err):
        return Err(TrackerError(message="gh auth required", hint="Run: gh auth login"))

    user = _gh_json("user", root=root)
    if isinstance(user, Err):
        return user
    data = as_str_dict(user.value)
    login = get_str(data, "login") if data is not None else None
    if login is None:
        return Err(TrackerError(message="could not determine GitHub login", hint="gh api user"))
    return Ok(GitHubAuthenticated(login=login))


def issues_endpoint(config: GitHubConfig, labels: Sequence[str]) -> str:
    params = {"state": "open", "per_page": "100"}
    if labels:
        params["labels"] = ",".join(labels)
    return f"repos/{config.slug}/issues?{urllib.parse.urlencode(params)}"


def _flatten_pages(obj: object) -> list[object] | None:
    pages = as_obj_list(obj)
    if pages is None:
        return None
    items: list[object] = []
    for page in pages:
        page_items = as_obj_list(page)
        if page_items is None:
            return None
        items.extend(page_items)
    return items


def list_issues(
    config: GitHubConfig,
    session: GitHubSession,
    labels: Sequence[str],
    *,
    root: Path,
) -> Result[tuple[GitHubAuthenticated, list[GitHubIssue]], TrackerError]:
    """Open issues (pull requests excluded), plus the possibly refreshed session."""
    authed = ensure_session(session, root=root)
    if isinstance(authed, Err):
        return authed

    endpoint = issues_endpoint(config, labels)
    obj = _gh_json(endpoint, root=root, paginate=True)
    if isinstance(obj, Err):
        return obj

    items = _flatten_pages(obj.value)
    if items is None:
        return Err(TrackerError(message=f"unexpected issues payload: {config.slug}", hint=endpoint))

    issues: list[GitHubIssue] = []
    for raw in items:
        item = as_str_dict(raw)
        if item is None or "pull_request" in item:
            continue
        number = item.get("number")
        if not isinstance(number, int):
            continue
        issues.append(GitHubIssue(number=number, title=get_str(item, "title") or ""))
    return Ok((authed.value, issues))
