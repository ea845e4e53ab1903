"""Issue tracker collaborators: Jira, GitHub and the selection prompt."""

from .errors import TrackerError
from .github import GitHubAuthenticated, GitHubNew, GitHubSession
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .issue import GitHubIssue, Issue, JiraIssue
from .prompt import MockPrompt, Prompt

__all__ = [
    "TrackerError",
    "GitHubAuthenticated",
    "GitHubNew",
    "GitHubSession",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "GitHubIssue",
    "Issue",
    "JiraIssue",
    "MockPrompt",
    "Prompt",
]
