from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rf import __version__
from rf.cli.app import app
from rf.cli.context import CONFIG_ENV_VAR
from rf.core.errors import ErrorCode

runner = CliRunner()

CARGO = '[package]\nname = "demo"\nversion = "1.2.3"\n'

RELEASE_ONLY = """
[[workflows]]
name = "release"

[[workflows.steps]]
type = "BumpVersion"
rule = "Minor"

[[workflows.steps]]
type = "Command"
command = "git tag v$v"
variables = { "$v" = "Version" }
"""

TWO_WORKFLOWS = (
    RELEASE_ONLY
    + """
[[workflows]]
name = "finish"

[[workflows.steps]]
type = "TransitionJiraIssue"
status = "Done"

[[workflows]]
name = "fail"

[[workflows.steps]]
type = "Command"
command = "exit 3"
"""
)


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "Cargo.toml").write_text(CARGO, encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "rf.toml"))
    return tmp_path


def _config(root: Path, text: str) -> Path:
    path = root / "rf.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


class TestConfigOption:
    def test_missing_file(self, project: Path) -> None:
        result = runner.invoke(app, ["--config", str(project / "nope.toml"), "validate"])

        assert result.exit_code == ErrorCode.CONFIG_ERROR
        assert "does not exist" in result.output

    def test_selects_file(self, project: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        other = tmp_path_factory.mktemp("other")
        path = _config(other, RELEASE_ONLY)

        result = runner.invoke(app, ["--config", str(path), "validate"])

        assert result.exit_code == 0
        assert "rf.toml is valid (1 workflow(s))" in result.output


class TestValidateAndList:
    def test_invalid_config(self, project: Path) -> None:
        _config(project, "[[workflows]]\nname = 'x'\n")

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == ErrorCode.CONFIG_ERROR
        assert "has no steps" in result.output

    def test_list(self, project: Path) -> None:
        _config(project, TWO_WORKFLOWS)

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "release" in result.output
        assert "1. BumpVersion" in result.output
        assert "finish" in result.output


class TestRun:
    def test_dry_run_single_workflow(self, project: Path) -> None:
        _config(project, RELEASE_ONLY)

        result = runner.invoke(app, ["run", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "[1/2] BumpVersion" in result.output
        assert "Would bump version to 1.3.0 in Cargo.toml" in result.output
        assert "Would run git tag v1.2.3" in result.output
        assert "workflow release finished (dry run)" in result.output
        assert (project / "Cargo.toml").read_text(encoding="utf-8") == CARGO

    def test_unknown_workflow(self, project: Path) -> None:
        _config(project, TWO_WORKFLOWS)

        result = runner.invoke(app, ["run", "deploy"])

        assert result.exit_code == ErrorCode.USER_ERROR
        assert "unknown workflow: deploy" in result.output

    def test_ambiguous_without_tty(self, project: Path) -> None:
        _config(project, TWO_WORKFLOWS)

        result = runner.invoke(app, ["run"])

        assert result.exit_code == ErrorCode.USER_ERROR
        assert "pass one by name" in result.output

    def test_usage_error_exit_code(self, project: Path) -> None:
        _config(project, TWO_WORKFLOWS)

        result = runner.invoke(app, ["run", "finish"])

        assert result.exit_code == ErrorCode.USER_ERROR
        assert "No issue selected" in result.output

    def test_failed_command_exit_code(self, project: Path) -> None:
        _config(project, TWO_WORKFLOWS)

        result = runner.invoke(app, ["run", "fail"])

        assert result.exit_code == ErrorCode.COMMAND_ERROR
        assert "command failed (exit 3): exit 3" in result.output

    def test_real_bump_writes_manifest(self, project: Path) -> None:
        _config(
            project,
            '[[workflows]]\nname = "b"\n\n[[workflows.steps]]\ntype = "BumpVersion"\n'
            'rule = "Major"\n',
        )

        result = runner.invoke(app, ["run", "b"])

        assert result.exit_code == 0, result.output
        assert 'version = "2.0.0"' in (project / "Cargo.toml").read_text(encoding="utf-8")


class TestVersionCommand:
    def test_prints_version_and_manifest(self, project: Path) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "1.2.3 (Cargo.toml)" in result.output

    def test_no_manifest(self, project: Path) -> None:
        (project / "Cargo.toml").unlink()

        result = runner.invoke(app, ["version"])

        assert result.exit_code == ErrorCode.DISCOVERY_ERROR
        assert "No supported metadata found" in result.output
