from __future__ import annotations

from pathlib import Path

import pytest

from rf.core.errors import ErrorCode
from rf.output.console import MockConsole
from rf.output.errors import describe_step_error, print_step_error, step_error_exit_code
from rf.release.errors import (
    InvalidManifestVersion,
    ManifestNotFound,
    ManifestWriteFailed,
    RuleNotApplicable,
)
from rf.workflow.errors import (
    CommandFailed,
    ExternalCallFailed,
    IssueAlreadySelected,
    NoIssueSelected,
    StepError,
    TrackerNotConfigured,
    UnsupportedTrackerOperation,
    from_manifest_write,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (IssueAlreadySelected(issue="P-1: x"), ErrorCode.USER_ERROR),
        (NoIssueSelected(), ErrorCode.USER_ERROR),
        (UnsupportedTrackerOperation("GitHub", "transition issue"), ErrorCode.USER_ERROR),
        (TrackerNotConfigured("Jira"), ErrorCode.USER_ERROR),
        (ManifestNotFound(searched=("Cargo.toml",)), ErrorCode.DISCOVERY_ERROR),
        (InvalidManifestVersion("Cargo.toml", "x"), ErrorCode.DISCOVERY_ERROR),
        (RuleNotApplicable("1.0.0-rc", "nope"), ErrorCode.RULE_ERROR),
        (ExternalCallFailed("select Jira issue", "down"), ErrorCode.EXTERNAL_ERROR),
        (CommandFailed("make", 2), ErrorCode.COMMAND_ERROR),
    ],
)
def test_exit_codes(error: StepError, code: ErrorCode) -> None:
    assert step_error_exit_code(error) == code


class TestDescribe:
    def test_already_selected(self) -> None:
        message, _ = describe_step_error(IssueAlreadySelected(issue="P-1: x"))
        assert message.startswith("You've already selected an issue!")

    def test_manifest_not_found(self) -> None:
        message, hint = describe_step_error(
            ManifestNotFound(searched=("Cargo.toml", "package.json"))
        )
        assert message == "No supported metadata found to parse version from"
        assert hint == "looked for Cargo.toml, package.json"

    def test_invalid_version(self) -> None:
        message, _ = describe_step_error(InvalidManifestVersion("Cargo.toml", "1.x"))
        assert message == "Found 1.x in Cargo.toml which is not a valid version"

    def test_manifest_write_maps_to_external(self) -> None:
        error = from_manifest_write(
            ManifestWriteFailed(path=Path("/p/Cargo.toml"), reason="read-only")
        )
        message, hint = describe_step_error(error)
        assert message == "write Cargo.toml: read-only"
        assert hint == str(Path("/p/Cargo.toml"))


def test_print_step_error_adds_hint() -> None:
    console = MockConsole()

    print_step_error(NoIssueSelected(), console)

    assert console.messages[0] == "error: No issue selected"
    assert console.messages[1].startswith("hint: ")
