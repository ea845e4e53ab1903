"""Workflow state machine, steps and driver."""

from .context import WorkflowContext
from .errors import StepError
from .mode import DryRun, Real, RunMode
from .state import Bumped, Initial, IssueSelected, ReleaseInitial, State, initial_state
from .steps import Step, Workflow, run_step, run_workflow

__all__ = [
    "WorkflowContext",
    "StepError",
    "DryRun",
    "Real",
    "RunMode",
    "Bumped",
    "Initial",
    "IssueSelected",
    "ReleaseInitial",
    "State",
    "initial_state",
    "Step",
    "Workflow",
    "run_step",
    "run_workflow",
]
