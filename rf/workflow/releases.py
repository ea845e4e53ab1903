"""BumpVersion step."""

from __future__ import annotations

from dataclasses import replace

from rf.core.result import Err, Ok, Result
from rf.release.manifests import discover_version, write_version
from rf.release.semver import Rule, bump
from rf.workflow.context import WorkflowContext
from rf.workflow.errors import StepError, from_manifest_write
from rf.workflow.mode import DryRun, Real, RunMode
from rf.workflow.state import State, with_bumped_version

__all__ = ["bump_version"]


def bump_version(
    state: State, rule: Rule, *, mode: RunMode, ctx: WorkflowContext
) -> Result[State, StepError]:
    """Bump the project version and record it as `Bumped` in the state.

    The manifest is discovered fresh on every call. Independent of issue
    selection. In dry-run mode nothing is written, but the bumped version is
    still recorded so later steps preview the right value.
    """
    found = discover_version(root=ctx.root)
    if isinstance(found, Err):
        return found
    current = found.value

    bumped = bump(current.version, rule)
    if isinstance(bumped, Err):
        return bumped
    new = replace(current, version=bumped.value)

    match mode:
        case DryRun(sink=sink):
            sink.preview(f"Would bump version to {new} in {new.file_name}")
        case Real():
            written = write_version(root=ctx.root, package_version=new)
            if isinstance(written, Err):
                return Err(from_manifest_write(written.error))
            ctx.console.success(f"Bumped {new.file_name} from {current} to {new}")

    return Ok(with_bumped_version(state, new.version))
