from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rf.output.console import ConsoleProtocol
from rf.trackers.http import HttpClient
from rf.trackers.prompt import Prompt


@dataclass(frozen=True, slots=True)
class WorkflowContext:
    """Collaborators a step may call. Never changes during a run.

    Attributes:
        root: Project directory (manifests, git repo, command cwd).
        console: Progress output in both modes.
        prompt: Interactive issue selection.
        http: Client for the Jira REST API.
        env: Environment used for tracker credentials.
    """

    root: Path
    console: ConsoleProtocol
    prompt: Prompt
    http: HttpClient
    env: Mapping[str, str] = field(default_factory=dict)
