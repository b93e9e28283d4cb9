from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

SUCCESS_STEP = "success"
FAILURE_STEP = "failure"
INLINE_STEP = "inline"

CONTROL_STEPS = frozenset({SUCCESS_STEP, FAILURE_STEP})


class ConditionKind(str, Enum):
    IF = "if"
    UNLESS = "unless"


@dataclass(frozen=True)
class StepCondition:
    kind: ConditionKind
    predicate: Callable[[Any], Any]

    def permits(self, subject: Any) -> bool:
        result = bool(self.predicate(subject))
        if self.kind is ConditionKind.IF:
            return result
        return not result


@dataclass(frozen=True)
class NamedMethod:
    """Dispatch to a method of the use case (or one of its capabilities) by name."""

    method_name: str


@dataclass(frozen=True)
class InlineCallable:
    """Callable receiving the use case instance."""

    fn: Callable[[Any], Any]


StepAction = Union[NamedMethod, InlineCallable]


def _freeze(options: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(options or {}))


@dataclass(frozen=True)
class StepDeclaration:
    name: str
    action: Optional[StepAction] = None
    conditions: Tuple[StepCondition, ...] = ()
    options: Mapping[str, Any] = field(default_factory=lambda: _freeze(None))

    def __post_init__(self) -> None:
        if not isinstance(self.options, MappingProxyType):
            object.__setattr__(self, "options", _freeze(self.options))

    @property
    def is_success(self) -> bool:
        return self.action is None and self.name == SUCCESS_STEP

    @property
    def is_failure(self) -> bool:
        return self.action is None and self.name == FAILURE_STEP

    def should_run(self, subject: Any) -> bool:
        # every attached condition must permit execution
        return all(condition.permits(subject) for condition in self.conditions)
