"""Workflow definitions from rf.toml.

Example:

    [jira]
    url = "https://example.atlassian.net"
    project = "PROJ"

    [[workflows]]
    name = "start"

    [[workflows.steps]]
    type = "SelectJiraIssue"
    status = "Backlog"

    [[workflows.steps]]
    type = "SwitchBranches"

    [[workflows]]
    name = "release"

    [[workflows.steps]]
    type = "BumpVersion"
    rule = "Pre"
    label = "rc"

    [[workflows.steps]]
    type = "Command"
    command = "git tag v$version"
    variables = { "$version" = "Version" }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from rf.core.config import ConfigError, TrackerConfig, parse_toml, parse_trackers
from rf.core.result import Err, Ok, Result
from rf.core.structured import as_str_dict, get_list, get_str, get_str_list, get_table
from rf.release.semver import ConventionalRule, Pre, Rule
from rf.workflow.command import Variable
from rf.workflow.steps import (
    BumpVersion,
    Command,
    SelectGitHubIssue,
    SelectJiraIssue,
    Step,
    SwitchBranches,
    TransitionJiraIssue,
    Workflow,
)

__all__ = ["Config", "config_from_dict", "load_config", "parse_step"]

_SIMPLE_RULES: dict[str, Rule] = {
    "Major": "major",
    "Minor": "minor",
    "Patch": "patch",
    "Release": "release",
}
_FALLBACK_RULES: dict[str, ConventionalRule] = {
    "Major": "major",
    "Minor": "minor",
    "Patch": "patch",
}


@dataclass(frozen=True, slots=True)
class Config:
    trackers: TrackerConfig
    workflows: tuple[Workflow, ...]

    def workflow(self, name: str) -> Workflow | None:
        for wf in self.workflows:
            if wf.name == name:
                return wf
        return None

    @property
    def names(self) -> list[str]:
        return [wf.name for wf in self.workflows]


def _need(table: Mapping[str, object], key: str, *, where: str) -> Result[str, ConfigError]:
    value = get_str(table, key)
    if value is None:
        return Err(ConfigError(f"{where}: missing '{key}'"))
    return Ok(value)


def _parse_rule(table: Mapping[str, object], *, where: str) -> Result[Rule, ConfigError]:
    name = _need(table, "rule", where=where)
    if isinstance(name, Err):
        return name

    if name.value in _SIMPLE_RULES:
        return Ok(_SIMPLE_RULES[name.value])

    if name.value != "Pre":
        allowed = ", ".join([*_SIMPLE_RULES, "Pre"])
        return Err(ConfigError(f"{where}: unknown rule {name.value!r} (expected {allowed})"))

    label = _need(table, "label", where=where)
    if isinstance(label, Err):
        return label
    fallback_name = get_str(table, "fallback") or "Patch"
    fallback = _FALLBACK_RULES.get(fallback_name)
    if fallback is None:
        return Err(ConfigError(f"{where}: fallback must be Major, Minor or Patch"))
    return Ok(Pre(label=label.value, fallback=fallback))


def _parse_variables(
    table: Mapping[str, object], *, where: str
) -> Result[dict[str, Variable], ConfigError]:
    if "variables" not in table:
        return Ok({})
    raw = get_table(table, "variables")
    if raw is None:
        return Err(ConfigError(f"{where}: variables must be a table"))

    known = {v.value: v for v in Variable}
    out: dict[str, Variable] = {}
    for token, kind in raw.items():
        if not token:
            return Err(ConfigError(f"{where}: variable token must not be empty"))
        variable = known.get(kind) if isinstance(kind, str) else None
        if variable is None:
            expected = " or ".join(known)
            return Err(ConfigError(f"{where}: variable {token!r} must be {expected}"))
        out[token] = variable
    return Ok(out)


def parse_step(table: Mapping[str, object], *, where: str) -> Result[Step, ConfigError]:
    kind = _need(table, "type", where=where)
    if isinstance(kind, Err):
        return kind

    match kind.value:
        case "SelectJiraIssue" | "TransitionJiraIssue":
            status = _need(table, "status", where=where)
            if isinstance(status, Err):
                return status
            if kind.value == "SelectJiraIssue":
                return Ok(SelectJiraIssue(status=status.value))
            return Ok(TransitionJiraIssue(status=status.value))
        case "SelectGitHubIssue":
            if "labels" not in table:
                return Ok(SelectGitHubIssue())
            labels = get_str_list(table, "labels")
            if labels is None:
                return Err(ConfigError(f"{where}: labels must be a list of strings"))
            return Ok(SelectGitHubIssue(labels=tuple(labels)))
        case "SwitchBranches":
            return Ok(SwitchBranches())
        case "BumpVersion":
            rule = _parse_rule(table, where=where)
            if isinstance(rule, Err):
                return rule
            return Ok(BumpVersion(rule=rule.value))
        case "Command":
            command = _need(table, "command", where=where)
            if isinstance(command, Err):
                return command
            variables = _parse_variables(table, where=where)
            if isinstance(variables, Err):
                return variables
            return Ok(Command(command=command.value, variables=variables.value))
        case other:
            return Err(ConfigError(f"{where}: unknown step type {other!r}"))


def _parse_workflow(raw: object, *, index: int) -> Result[Workflow, ConfigError]:
    table = as_str_dict(raw)
    if table is None:
        return Err(ConfigError(f"workflows[{index}] must be a table"))
    name = _need(table, "name", where=f"workflows[{index}]")
    if isinstance(name, Err):
        return name

    raw_steps = get_list(table, "steps")
    if not raw_steps:
        return Err(ConfigError(f"workflow {name.value!r} has no steps"))

    steps: list[Step] = []
    for i, raw_step in enumerate(raw_steps):
        where = f"workflow {name.value!r} step {i + 1}"
        step_table = as_str_dict(raw_step)
        if step_table is None:
            return Err(ConfigError(f"{where}: must be a table"))
        step = parse_step(step_table, where=where)
        if isinstance(step, Err):
            return step
        steps.append(step.value)
    return Ok(Workflow(name=name.value, steps=tuple(steps)))


def config_from_dict(data: Mapping[str, object]) -> Result[Config, ConfigError]:
    trackers = parse_trackers(data)
    if isinstance(trackers, Err):
        return trackers

    raw_workflows = get_list(data, "workflows")
    if not raw_workflows:
        return Err(ConfigError("no [[workflows]] defined"))

    workflows: list[Workflow] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_workflows):
        wf = _parse_workflow(raw, index=index)
        if isinstance(wf, Err):
            return wf
        if wf.value.name in seen:
            return Err(ConfigError(f"duplicate workflow name {wf.value.name!r}"))
        seen.add(wf.value.name)
        workflows.append(wf.value)

    return Ok(Config(trackers=trackers.value, workflows=tuple(workflows)))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate rf.toml.

    Returns:
        Ok(Config) on success, Err(ConfigError) carrying `path` on failure.
    """
    data = parse_toml(path)
    if isinstance(data, Err):
        return data
    return config_from_dict(data.value).map_err(lambda e: replace(e, path=path))
