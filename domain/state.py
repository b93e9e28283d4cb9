from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet

from domain.exceptions import InvalidStateTransition


class ExecutionState(str, Enum):
    CREATED = "created"
    PREPARING = "preparing"
    VALIDATING = "validating"
    RUNNING_STEPS = "running_steps"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (ExecutionState.SUCCEEDED, ExecutionState.FAILED)


_TRANSITIONS: Dict[ExecutionState, FrozenSet[ExecutionState]] = {
    ExecutionState.CREATED: frozenset({ExecutionState.PREPARING}),
    ExecutionState.PREPARING: frozenset({ExecutionState.VALIDATING}),
    ExecutionState.VALIDATING: frozenset({ExecutionState.RUNNING_STEPS, ExecutionState.FAILED}),
    ExecutionState.RUNNING_STEPS: frozenset({ExecutionState.SUCCEEDED, ExecutionState.FAILED}),
    ExecutionState.SUCCEEDED: frozenset(),
    ExecutionState.FAILED: frozenset(),
}


def transition(current: ExecutionState, new_state: ExecutionState) -> ExecutionState:
    if new_state not in _TRANSITIONS[current]:
        raise InvalidStateTransition(f"Invalid use case transition: {current.value} -> {new_state.value}")
    return new_state
