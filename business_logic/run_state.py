"""
Run state container and reducer.

The dashboard's run lifecycle is an explicit immutable state plus a pure
function from (state, event) to the next state.
"""

from dataclasses import dataclass, replace
from enum import Enum

from models.data_models import RunStatus
from data.catalog import STATUS_STEPS


class RunEvent(Enum):
    """Events that move a run through its stages."""
    START = "start"
    ADVANCE = "advance"
    COMPLETE = "complete"
    RESET = "reset"


# Stage index -> status while that stage is current
STAGE_STATUSES = [RunStatus[step['key']] for step in STATUS_STEPS]


@dataclass(frozen=True)
class RunState:
    """Current status and the index of the active progress stage (-1 when idle)."""
    status: RunStatus = RunStatus.IDLE
    current_step_index: int = -1

    @property
    def can_start(self) -> bool:
        return self.status in (RunStatus.IDLE, RunStatus.COMPLETED)

    @property
    def is_running(self) -> bool:
        return not self.can_start

    @property
    def progress_percent(self) -> float:
        if self.status == RunStatus.COMPLETED:
            return 100.0
        if self.status == RunStatus.IDLE:
            return 0.0
        return (self.current_step_index + 0.5) * (100 / len(STAGE_STATUSES))

    @property
    def status_label(self) -> str:
        if self.status == RunStatus.COMPLETED:
            return "Optimization Complete"
        if self.status == RunStatus.IDLE:
            return ""
        return "Calculating Scenarios..."


def reduce_run_state(state: RunState, event: RunEvent) -> RunState:
    """
    Apply an event to a run state.

    Events that do not apply to the current status return the state
    unchanged, so a second START during a run is a no-op.
    """
    if event == RunEvent.RESET:
        return RunState()

    if event == RunEvent.START:
        if not state.can_start:
            return state
        return RunState(status=STAGE_STATUSES[0], current_step_index=0)

    if event == RunEvent.ADVANCE:
        if not state.is_running:
            return state
        next_index = min(state.current_step_index + 1, len(STAGE_STATUSES) - 1)
        return replace(state, status=STAGE_STATUSES[next_index], current_step_index=next_index)

    if event == RunEvent.COMPLETE:
        if not state.is_running:
            return state
        return replace(state, status=RunStatus.COMPLETED)

    raise ValueError(f"Unknown run event: {event}")
