from domain.steps.declaration import (
    CONTROL_STEPS,
    FAILURE_STEP,
    INLINE_STEP,
    SUCCESS_STEP,
    ConditionKind,
    InlineCallable,
    NamedMethod,
    StepAction,
    StepCondition,
    StepDeclaration,
)
from domain.steps.result import CONTINUE, Continue, Halt, StepResult

__all__ = [
    "CONTROL_STEPS",
    "FAILURE_STEP",
    "INLINE_STEP",
    "SUCCESS_STEP",
    "ConditionKind",
    "InlineCallable",
    "NamedMethod",
    "StepAction",
    "StepCondition",
    "StepDeclaration",
    "CONTINUE",
    "Continue",
    "Halt",
    "StepResult",
]
