from __future__ import annotations

import os

import typer

from rf.cli.commands._helpers import exit_on_step_error, exit_with_code
from rf.cli.context import CLIContext, build_context
from rf.cli.selector import (
    SelectorOption,
    TerminalPrompt,
    is_interactive_terminal,
    select_one,
)
from rf.core.errors import ErrorCode
from rf.core.result import Err
from rf.trackers.http import RealHttpClient
from rf.workflow.context import WorkflowContext
from rf.workflow.mode import DryRun, Real, RunMode
from rf.workflow.state import initial_state
from rf.workflow.steps import Workflow, run_workflow


def _pick_workflow(ctx: CLIContext, name: str | None) -> Workflow:
    workflows = ctx.config.workflows
    if name is not None:
        wf = ctx.config.workflow(name)
        if wf is None:
            ctx.console.error(f"unknown workflow: {name}")
            ctx.console.print(f"available: {', '.join(ctx.config.names)}")
            exit_with_code(int(ErrorCode.USER_ERROR))
        return wf

    if len(workflows) == 1:
        return workflows[0]

    if not is_interactive_terminal():
        ctx.console.error("several workflows configured; pass one by name")
        ctx.console.print(f"available: {', '.join(ctx.config.names)}")
        exit_with_code(int(ErrorCode.USER_ERROR))

    options = [SelectorOption(value=wf, label=wf.name) for wf in workflows]
    picked = select_one(title="Select a workflow", options=options)
    if picked.value is None:
        exit_with_code(int(ErrorCode.USER_ERROR))
    return picked.value


def run(
    workflow: str | None = typer.Argument(None, help="Workflow name from rf.toml"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Preview writes, transitions and commands without doing them"
    ),
) -> None:
    """Run a workflow's steps in order."""
    ctx = build_context()
    wf = _pick_workflow(ctx, workflow)

    mode: RunMode = DryRun(sink=ctx.console) if dry_run else Real()
    wctx = WorkflowContext(
        root=ctx.root,
        console=ctx.console,
        prompt=TerminalPrompt(),
        http=RealHttpClient(),
        env=dict(os.environ),
    )

    result = run_workflow(wf, initial_state(ctx.config.trackers), mode=mode, ctx=wctx)
    if isinstance(result, Err):
        exit_on_step_error(result.error, ctx.console)

    ctx.console.newline()
    suffix = " (dry run)" if dry_run else ""
    ctx.console.success(f"workflow {wf.name} finished{suffix}")
