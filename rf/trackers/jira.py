"""Jira Cloud REST client (API v3).

Authentication is HTTP basic with an account email and an API token, read
from `JIRA_USER` and `JIRA_TOKEN`.
"""

from __future__ import annotations

import base64
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass

from rf.core.config import JiraConfig
from rf.core.result import Err, Ok, Result
from rf.core.structured import as_str_dict, get_list, get_str, get_table
from rf.trackers.errors import TrackerError
from rf.trackers.http import HttpClient
from rf.trackers.issue import JiraIssue

__all__ = [
    "JiraCredentials",
    "jira_credentials",
    "list_issues",
    "search_url",
    "transition_issue",
    "transitions_url",
]

_CREDENTIALS_HINT = "Set JIRA_USER (account email) and JIRA_TOKEN (API token)"


@dataclass(frozen=True, slots=True)
class JiraCredentials:
    user: str
    token: str

    def headers(self) -> dict[str, str]:
        raw = f"{self.user}:{self.token}".encode("utf-8")
        return {"Authorization": f"Basic {base64.b64encode(raw).decode('ascii')}"}


def jira_credentials(env: Mapping[str, str]) -> Result[JiraCredentials, TrackerError]:
    user = env.get("JIRA_USER", "").strip()
    token = env.get("JIRA_TOKEN", "").strip()
    if not user or not token:
        return Err(TrackerError(message="Jira credentials missing", hint=_CREDENTIALS_HINT))
    return Ok(JiraCredentials(user=user, token=token))


def _jql_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def search_url(config: JiraConfig, status: str, *, page_token: str | None = None) -> str:
    jql = f"status = {_jql_string(status)} AND project = {_jql_string(config.project)}"
    params = {"jql": jql, "fields": "summary"}
    if page_token is not None:
        params["nextPageToken"] = page_token
    return f"{config.api_base}/search/jql?{urllib.parse.urlencode(params)}"


def transitions_url(config: JiraConfig, key: str) -> str:
    return f"{config.api_base}/issue/{urllib.parse.quote(key)}/transitions"


def list_issues(
    config: JiraConfig,
    status: str,
    *,
    http: HttpClient,
    credentials: JiraCredentials,
) -> Result[list[JiraIssue], TrackerError]:
    """Issues of the configured project currently in `status`, across all result pages."""
    issues: list[JiraIssue] = []
    seen_tokens: set[str] = set()
    token: str | None = None
    while True:
        url = search_url(config, status, page_token=token)
        result = http.get_json(url, headers=credentials.headers())
        if isinstance(result, Err):
            return Err(TrackerError(message="Jira search failed", hint=str(result.error)))

        data = as_str_dict(result.value)
        raw_issues = get_list(data, "issues") if data is not None else None
        if data is None or raw_issues is None:
            return Err(TrackerError(message="unexpected Jira search response", hint=url))
        issues.extend(_parse_issues(raw_issues))

        token = get_str(data, "nextPageToken")
        if token is None or data.get("isLast") is True or token in seen_tokens:
            return Ok(issues)
        seen_tokens.add(token)


def _parse_issues(raw_issues: list[object]) -> list[JiraIssue]:
    issues: list[JiraIssue] = []
    for raw in raw_issues:
        item = as_str_dict(raw)
        if item is None:
            continue
        key = get_str(item, "key")
        fields = get_table(item, "fields") or {}
        if key is None:
            continue
        issues.append(JiraIssue(key=key, summary=get_str(fields, "summary") or ""))
    return issues


def _find_transition_id(payload: object, status: str) -> str | None:
    data = as_str_dict(payload)
    transitions = get_list(data, "transitions") if data is not None else None
    if transitions is None:
        return None

    wanted = status.casefold()
    for raw in transitions:
        item = as_str_dict(raw)
        if item is None:
            continue
        target = get_table(item, "to") or {}
        names = {get_str(item, "name"), get_str(target, "name")}
        if any(n is not None and n.casefold() == wanted for n in names):
            return get_str(item, "id")
    return None


def transition_issue(
    config: JiraConfig,
    key: str,
    status: str,
    *,
    http: HttpClient,
    credentials: JiraCredentials,
) -> Result[None, TrackerError]:
    """Move issue `key` to `status` using the matching workflow transition."""
    url = transitions_url(config, key)
    headers = credentials.headers()

    available = http.get_json(url, headers=headers)
    if isinstance(available, Err):
        return Err(
            TrackerError(message=f"could not list transitions for {key}", hint=str(available.error))
        )

    transition_id = _find_transition_id(available.value, status)
    if transition_id is None:
        return Err(
            TrackerError(
                message=f"{key} has no transition to {status!r}",
                hint="Check the status name against the project's Jira workflow",
            )
        )

    posted = http.post_json(url, {"transition": {"id": transition_id}}, headers=headers)
    if isinstance(posted, Err):
        return Err(TrackerError(message=f"failed to transition {key}", hint=str(posted.error)))
    return Ok(None)
