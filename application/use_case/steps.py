from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from domain.codes import OutcomeCode, normalize_code
from domain.exceptions import StepDefinitionError
from domain.steps.declaration import (
    CONTROL_STEPS,
    FAILURE_STEP,
    INLINE_STEP,
    SUCCESS_STEP,
    ConditionKind,
    InlineCallable,
    NamedMethod,
    StepCondition,
    StepDeclaration,
)
from domain.validation.rules import ValidationRule

Predicate = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldRecord:
    """Read the record from a declared field once params are assigned."""

    field_name: str

    def resolve(self, subject: Any) -> Any:
        return getattr(subject, self.field_name, None)


@dataclass(frozen=True)
class ComputedRecord:
    fn: Callable[[Any], Any]

    def resolve(self, subject: Any) -> Any:
        return self.fn(subject)


RecordStrategy = Union[FieldRecord, ComputedRecord]


@dataclass(frozen=True)
class StepsDefinition:
    """Frozen result of a ``Steps`` builder, stored on each use case class."""

    steps: Tuple[StepDeclaration, ...] = ()
    capabilities: Tuple[object, ...] = ()
    rules: Tuple[ValidationRule, ...] = ()
    record_strategy: Optional[RecordStrategy] = None

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(step.name for step in self.steps)


def _conditions(if_: Optional[Predicate], unless: Optional[Predicate]) -> Tuple[StepCondition, ...]:
    conditions: List[StepCondition] = []
    for kind, predicate in ((ConditionKind.IF, if_), (ConditionKind.UNLESS, unless)):
        if predicate is None:
            continue
        if not callable(predicate):
            raise StepDefinitionError(f"'{kind.value}' condition must be callable, got {predicate!r}")
        conditions.append(StepCondition(kind=kind, predicate=predicate))
    return tuple(conditions)


class Steps:
    """
    Fluent builder for the process of a use case.

    Assign an instance to the ``process`` class attribute::

        class PublishPost(UseCase):
            process = (
                Steps()
                .validate(presence("title", "author"))
                .failure("access_denied", message="No permission", unless=lambda uc: uc.can_publish())
                .step("build_post")
                .step("save_record")
            )

    A subclass starts from its parent's steps, capabilities, validations and
    record strategy; ``Steps(inherit=False)`` starts from scratch.
    The builder is frozen once a class has been built from it.
    """

    def __init__(self, inherit: bool = True):
        self.inherit = inherit
        self._steps: List[StepDeclaration] = []
        self._capabilities: List[object] = []
        self._rules: List[ValidationRule] = []
        self._record: Optional[RecordStrategy] = None
        self._frozen = False

    def step(
        self,
        name: Union[str, Callable[[Any], Any], None] = None,
        action: Optional[Callable[[Any], Any]] = None,
        *,
        if_: Optional[Predicate] = None,
        unless: Optional[Predicate] = None,
        **options: Any,
    ) -> "Steps":
        if callable(name) and action is None:
            name, action = None, name

        if action is not None:
            if not callable(action):
                raise StepDefinitionError(f"Inline step action must be callable, got {action!r}")
            # the inline action wins; the name is only a label
            declaration = StepDeclaration(
                name=name or INLINE_STEP,
                action=InlineCallable(action),
                conditions=_conditions(if_, unless),
                options=options,
            )
            return self._append(declaration)

        if not name:
            raise StepDefinitionError("A step needs a method name or an inline action")

        if name == FAILURE_STEP:
            return self.failure(if_=if_, unless=unless, **options)

        declaration = StepDeclaration(
            name=name,
            action=None if name in CONTROL_STEPS else NamedMethod(name),
            conditions=_conditions(if_, unless),
            options=options,
        )
        return self._append(declaration)

    def success(
        self,
        *,
        if_: Optional[Predicate] = None,
        unless: Optional[Predicate] = None,
        **options: Any,
    ) -> "Steps":
        return self._append(
            StepDeclaration(name=SUCCESS_STEP, conditions=_conditions(if_, unless), options=options)
        )

    def failure(
        self,
        code: Any = None,
        *,
        message: Optional[str] = None,
        if_: Optional[Predicate] = None,
        unless: Optional[Predicate] = None,
        **options: Any,
    ) -> "Steps":
        options["code"] = normalize_code(code) or OutcomeCode.FAILURE.value
        options["message"] = message
        return self._append(
            StepDeclaration(name=FAILURE_STEP, conditions=_conditions(if_, unless), options=options)
        )

    def mix_in(self, capability: Any) -> "Steps":
        self._check_open()
        if isinstance(capability, type):
            capability = capability()
        self._capabilities.append(capability)
        return self

    def validate(self, *rules: ValidationRule) -> "Steps":
        self._check_open()
        for rule in rules:
            if not isinstance(rule, ValidationRule):
                raise StepDefinitionError(f"Not a validation rule: {rule!r}")
            self._rules.append(rule)
        return self

    def record(self, source: Union[str, Callable[[Any], Any]]) -> "Steps":
        """Register how the record is derived. Calling it again replaces the strategy."""
        self._check_open()
        if isinstance(source, str):
            self._record = FieldRecord(source)
        elif callable(source):
            self._record = ComputedRecord(source)
        else:
            raise StepDefinitionError(f"Record strategy must be a field name or a callable, got {source!r}")
        return self

    def build(self, parent: Optional[StepsDefinition] = None) -> StepsDefinition:
        self._frozen = True
        base = parent if (parent is not None and self.inherit) else StepsDefinition()
        return StepsDefinition(
            steps=base.steps + tuple(self._steps),
            capabilities=base.capabilities + tuple(self._capabilities),
            rules=base.rules + tuple(self._rules),
            record_strategy=self._record if self._record is not None else base.record_strategy,
        )

    def _append(self, declaration: StepDeclaration) -> "Steps":
        self._check_open()
        self._steps.append(declaration)
        return self

    def _check_open(self) -> None:
        if self._frozen:
            raise StepDefinitionError("Steps are frozen once a use case class has been built from them")
