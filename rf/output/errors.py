"""Error presentation utilities.

Centralized step error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rf.core.errors import ErrorCode
from rf.output.console import Style
from rf.release.errors import InvalidManifestVersion, ManifestNotFound, RuleNotApplicable
from rf.workflow.errors import (
    CommandFailed,
    ExternalCallFailed,
    IssueAlreadySelected,
    NoIssueSelected,
    StepError,
    TrackerNotConfigured,
    UnsupportedTrackerOperation,
)

if TYPE_CHECKING:
    from rf.output.console import ConsoleProtocol

__all__ = ["describe_step_error", "print_step_error", "step_error_exit_code"]


def describe_step_error(error: StepError) -> tuple[str, str | None]:
    """Return (message, hint) for a step error."""
    match error:
        case IssueAlreadySelected(issue=issue):
            return (f"You've already selected an issue! ({issue})", None)
        case NoIssueSelected():
            return (
                "No issue selected",
                "Run a SelectJiraIssue or SelectGitHubIssue step before this one",
            )
        case UnsupportedTrackerOperation(tracker=tracker, operation=operation):
            return (f"{operation} is not supported for {tracker} issues", None)
        case TrackerNotConfigured(tracker=tracker):
            return (f"{tracker} is not configured", f"Add a [{tracker.lower()}] table to rf.toml")
        case ManifestNotFound(searched=searched):
            return (
                "No supported metadata found to parse version from",
                f"looked for {', '.join(searched)}",
            )
        case InvalidManifestVersion(manifest=manifest, value=value):
            return (f"Found {value} in {manifest} which is not a valid version", None)
        case RuleNotApplicable(version=version, reason=reason):
            return (f"While bumping {version}: {reason}", None)
        case ExternalCallFailed(operation=operation, message=message, hint=hint):
            return (f"{operation}: {message}", hint)
        case CommandFailed(command=command, returncode=rc):
            return (f"command failed (exit {rc}): {command}", None)
    raise AssertionError(f"unexpected step error: {error!r}")


def print_step_error(error: StepError, console: ConsoleProtocol) -> None:
    message, hint = describe_step_error(error)
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def step_error_exit_code(error: StepError) -> int:
    match error:
        case (
            IssueAlreadySelected()
            | NoIssueSelected()
            | UnsupportedTrackerOperation()
            | TrackerNotConfigured()
        ):
            return int(ErrorCode.USER_ERROR)
        case ManifestNotFound() | InvalidManifestVersion():
            return int(ErrorCode.DISCOVERY_ERROR)
        case RuleNotApplicable():
            return int(ErrorCode.RULE_ERROR)
        case ExternalCallFailed():
            return int(ErrorCode.EXTERNAL_ERROR)
        case CommandFailed():
            return int(ErrorCode.COMMAND_ERROR)
    raise AssertionError(f"unexpected step error: {error!r}")
