from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class JiraIssue:
    key: str
    summary: str

    def __str__(self) -> str:
        return f"{self.key}: {self.summary}"


@dataclass(frozen=True, slots=True)
class GitHubIssue:
    number: int
    title: str

    def __str__(self) -> str:
        return f"{self.number}: {self.title}"


Issue = JiraIssue | GitHubIssue
