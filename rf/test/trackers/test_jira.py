from __future__ import annotations

import base64
import urllib.parse

from rf.core.config import JiraConfig
from rf.core.result import Err, Ok
from rf.trackers.http import HttpError, MockHttpClient
from rf.trackers.issue import JiraIssue
from rf.trackers.jira import (
    JiraCredentials,
    jira_credentials,
    list_issues,
    search_url,
    transition_issue,
    transitions_url,
)

CONFIG = JiraConfig(url="https://example.atlassian.net/", project="PROJ")
CREDS = JiraCredentials(user="dev@example.com", token="t0ken")


class TestCredentials:
    def test_from_env(self) -> None:
        result = jira_credentials({"JIRA_USER": "a@b.c", "JIRA_TOKEN": "x"})
        assert result == Ok(JiraCredentials(user="a@b.c", token="x"))

    def test_missing(self) -> None:
        result = jira_credentials({"JIRA_USER": "a@b.c", "JIRA_TOKEN": "  "})
        assert isinstance(result, Err)
        assert result.error.hint is not None

    def test_basic_auth_header(self) -> None:
        header = CREDS.headers()["Authorization"]
        assert header == "Basic " + base64.b64encode(b"dev@example.com:t0ken").decode("ascii")


class TestUrls:
    def test_search_url_carries_jql(self) -> None:
        url = search_url(CONFIG, "In Review")

        base, _, query = url.partition("?")
        assert base == "https://example.atlassian.net/rest/api/3/search/jql"
        params = urllib.parse.parse_qs(query)
        assert params["jql"] == ['status = "In Review" AND project = "PROJ"']
        assert params["fields"] == ["summary"]
        assert "nextPageToken" not in params

    def test_search_url_escapes_quotes_and_backslashes(self) -> None:
        url = search_url(CONFIG, 'Say "hi" \\ wave')

        params = urllib.parse.parse_qs(url.partition("?")[2])
        assert params["jql"] == ['status = "Say \\"hi\\" \\\\ wave" AND project = "PROJ"']

    def test_search_url_with_page_token(self) -> None:
        url = search_url(CONFIG, "Backlog", page_token="abc")

        params = urllib.parse.parse_qs(url.partition("?")[2])
        assert params["nextPageToken"] == ["abc"]

    def test_transitions_url(self) -> None:
        assert transitions_url(CONFIG, "PROJ-7") == (
            "https://example.atlassian.net/rest/api/3/issue/PROJ-7/transitions"
        )


class TestListIssues:
    def test_parses_issues(self) -> None:
        http = MockHttpClient()
        http.set_json(
            search_url(CONFIG, "Backlog"),
            {
                "issues": [
                    {"key": "PROJ-1", "fields": {"summary": "Add login"}},
                    {"fields": {"summary": "no key"}},
                    {"key": "PROJ-2"},
                ]
            },
        )

        result = list_issues(CONFIG, "Backlog", http=http, credentials=CREDS)

        assert result == Ok(
            [JiraIssue(key="PROJ-1", summary="Add login"), JiraIssue(key="PROJ-2", summary="")]
        )

    def test_follows_next_page_token(self) -> None:
        http = MockHttpClient()
        http.set_json(
            search_url(CONFIG, "Backlog"),
            {"issues": [{"key": "PROJ-1"}], "nextPageToken": "p2", "isLast": False},
        )
        http.set_json(
            search_url(CONFIG, "Backlog", page_token="p2"),
            {"issues": [{"key": "PROJ-2"}], "isLast": True},
        )

        result = list_issues(CONFIG, "Backlog", http=http, credentials=CREDS)

        assert result == Ok(
            [JiraIssue(key="PROJ-1", summary=""), JiraIssue(key="PROJ-2", summary="")]
        )
        assert len(http.calls) == 2

    def test_repeated_page_token_stops(self) -> None:
        http = MockHttpClient()
        page = {"issues": [{"key": "PROJ-1"}], "nextPageToken": "same"}
        http.set_json(search_url(CONFIG, "Backlog"), page)
        http.set_json(search_url(CONFIG, "Backlog", page_token="same"), page)

        result = list_issues(CONFIG, "Backlog", http=http, credentials=CREDS)

        assert isinstance(result, Ok)
        assert len(http.calls) == 2

    def test_unexpected_payload(self) -> None:
        http = MockHttpClient()
        http.set_json(search_url(CONFIG, "Backlog"), ["not", "a", "dict"])

        result = list_issues(CONFIG, "Backlog", http=http, credentials=CREDS)

        assert isinstance(result, Err)
        assert result.error.message == "unexpected Jira search response"

    def test_http_error(self) -> None:
        http = MockHttpClient()
        url = search_url(CONFIG, "Backlog")
        http.set_json(url, HttpError(url=url, status=401, message="Unauthorized"))

        result = list_issues(CONFIG, "Backlog", http=http, credentials=CREDS)

        assert isinstance(result, Err)
        assert result.error.hint is not None and "401" in result.error.hint


class TestTransitionIssue:
    def test_matches_target_status_name(self) -> None:
        http = MockHttpClient()
        url = transitions_url(CONFIG, "PROJ-1")
        http.set_json(url, {"transitions": [{"id": "21", "name": "Ship", "to": {"name": "Done"}}]})

        result = transition_issue(CONFIG, "PROJ-1", "done", http=http, credentials=CREDS)

        assert result == Ok(None)
        assert http.posted == [(url, {"transition": {"id": "21"}})]

    def test_no_matching_transition(self) -> None:
        http = MockHttpClient()
        http.set_json(transitions_url(CONFIG, "PROJ-1"), {"transitions": [{"id": "1"}]})

        result = transition_issue(CONFIG, "PROJ-1", "Done", http=http, credentials=CREDS)

        assert isinstance(result, Err)
        assert result.error.message == "PROJ-1 has no transition to 'Done'"
