from __future__ import annotations

from pathlib import Path

from rf.core.config import (
    ConfigError,
    GitHubConfig,
    JiraConfig,
    TrackerConfig,
    parse_toml,
    parse_trackers,
)
from rf.core.result import Err, Ok


class TestParseToml:
    def test_reads_table(self, tmp_path: Path) -> None:
        path = tmp_path / "rf.toml"
        path.write_text('[github]\nowner = "acme"\n', encoding="utf-8")

        assert parse_toml(path) == Ok({"github": {"owner": "acme"}})

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rf.toml"

        result = parse_toml(path)

        assert isinstance(result, Err)
        assert result.error.path == path
        assert "not found" in result.error.message

    def test_directory_instead_of_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rf.toml"
        path.mkdir()

        result = parse_toml(path)

        assert isinstance(result, Err)
        assert result.error.path == path

    def test_invalid_syntax(self, tmp_path: Path) -> None:
        path = tmp_path / "rf.toml"
        path.write_text("[[workflows]\n", encoding="utf-8")

        result = parse_toml(path)

        assert isinstance(result, Err)
        assert result.error.message.startswith("Invalid TOML syntax")


class TestParseTrackers:
    def test_both_absent(self) -> None:
        assert parse_trackers({}) == Ok(TrackerConfig())

    def test_both_present(self) -> None:
        result = parse_trackers(
            {
                "jira": {"url": "https://x.atlassian.net", "project": "P"},
                "github": {"owner": "o", "repo": "r"},
            }
        )

        assert result == Ok(
            TrackerConfig(
                jira=JiraConfig(url="https://x.atlassian.net", project="P"),
                github=GitHubConfig(owner="o", repo="r"),
            )
        )

    def test_jira_missing_project(self) -> None:
        result = parse_trackers({"jira": {"url": "https://x.atlassian.net"}})

        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigError)

    def test_github_not_a_table(self) -> None:
        assert parse_trackers({"github": "acme/widgets"}) == Err(
            ConfigError("[github] must be a table")
        )


def test_jira_api_base_strips_trailing_slash() -> None:
    assert JiraConfig(url="https://x.atlassian.net/", project="P").api_base == (
        "https://x.atlassian.net/rest/api/3"
    )


def test_github_slug() -> None:
    assert GitHubConfig(owner="acme", repo="widgets").slug == "acme/widgets"
