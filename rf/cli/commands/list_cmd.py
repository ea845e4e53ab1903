from __future__ import annotations

from rf.cli.context import build_context
from rf.output.console import Style
from rf.workflow.steps import step_name


def list_workflows() -> None:
    """List configured workflows and their steps."""
    ctx = build_context()
    for wf in ctx.config.workflows:
        ctx.console.print(wf.name, Style.HEADER)
        for index, step in enumerate(wf.steps, start=1):
            ctx.console.print(f"  {index}. {step_name(step)}", Style.DIM)


def validate() -> None:
    """Check rf.toml without running anything."""
    ctx = build_context()
    count = len(ctx.config.workflows)
    ctx.console.success(f"{ctx.config_path.name} is valid ({count} workflow(s))")
