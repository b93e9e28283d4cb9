from __future__ import annotations

import copy
import inspect
import typing
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from application.callable import Callable
from application.executor.action_resolver import ActionResolver
from application.executor.step_executor import StepExecutor
from application.outcome import Outcome
from application.ports.logger import LoggerPort
from application.use_case.steps import Steps, StepsDefinition
from domain.codes import OutcomeCode, normalize_code
from domain.exceptions import UseCaseFailure
from domain.ports import PersistableRecord
from domain.state import ExecutionState, transition
from domain.steps.declaration import StepDeclaration
from domain.steps.result import Halt
from domain.validation.errors import ErrorEntry, Errors
from infrastructure.logging.loguru_logger import LoguruLogger

# per-run state that params can never overwrite
RESERVED_FIELDS = frozenset(
    {"errors", "error_code", "state", "steps", "fields", "process", "definition", "logger", "capabilities"}
)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(annotation) is ClassVar or annotation is ClassVar


def _declared_fields(cls: type) -> Tuple[str, ...]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        if not (isinstance(klass, type) and issubclass(klass, UseCase)) or klass is UseCase:
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            if name.startswith("_") or name in RESERVED_FIELDS or _is_class_var(annotation):
                continue
            if name not in names:
                names.append(name)
    if "record" not in names:
        names.append("record")
    return tuple(names)


class UseCase(Callable):
    """
    One business operation expressed as an ordered list of steps.

    Subclasses declare their input fields as annotations and their process
    with a ``Steps`` builder::

        class CreatePost(UseCase):
            title: Optional[str] = None
            author: Optional[str] = None

            process = (
                Steps()
                .validate(presence("title", "author"))
                .step("build_post")
                .step("save_record")
            )

            def build_post(self):
                self.record = Post(title=self.title, author=self.author)
                return True

        outcome = CreatePost.call({"title": "Hello", "author": "ann"})

    A run assigns params, validates, derives the record, then executes the
    steps in order. A falsy step result, ``fail()``, a returned ``halt()``
    or a ``failure`` step ends the run as failed; a ``success`` step or a
    returned ``finish()`` ends it as successful. Any other exception raised
    by a step propagates to the caller.
    """

    process: ClassVar[Optional[Steps]] = None
    definition: ClassVar[StepsDefinition] = StepsDefinition()
    steps: ClassVar[Tuple[StepDeclaration, ...]] = ()
    fields: ClassVar[Tuple[str, ...]] = ("record",)
    logger: ClassVar[LoggerPort] = LoguruLogger()

    _resolver: ClassVar[ActionResolver] = ActionResolver(())

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        own = cls.__dict__.get("process")
        if own is not None:
            cls.definition = own.build(parent=cls.definition)
        cls.steps = cls.definition.steps
        cls.fields = _declared_fields(cls)
        cls._resolver = ActionResolver(cls.definition.capabilities)

    def __init__(self) -> None:
        # class defaults are copied so mutable defaults are not shared between runs
        for name in self.fields:
            setattr(self, name, copy.copy(getattr(type(self), name, None)))
        self.errors = Errors()
        self._rule_errors: List[ErrorEntry] = []
        self.error_code: Optional[str] = None
        self.state = ExecutionState.CREATED
        self._log: LoggerPort = self.logger.bind(use_case=type(self).__name__)

    def __call__(self, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Outcome:
        merged: Dict[str, Any] = dict(params or {})
        merged.update(kwargs)
        return self.invoke(merged)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "UseCase":
        """Build an instance with declared fields assigned, without running it."""
        instance = cls()
        instance.assign(params)
        return instance

    @property
    def capabilities(self) -> Tuple[object, ...]:
        return self.definition.capabilities

    def assign(self, params: Mapping[str, Any]) -> List[str]:
        """Copy declared fields out of ``params``; returns the keys that were ignored."""
        ignored: List[str] = []
        for key, value in params.items():
            if key in self.fields:
                setattr(self, key, value)
            else:
                ignored.append(str(key))
        if ignored:
            self._log.debug("params.ignored", keys=ignored)
        return ignored

    def invoke(self, params: Mapping[str, Any]) -> Outcome:
        self._log.info("use_case.start", params=sorted(str(k) for k in params))

        self._advance(ExecutionState.PREPARING)
        self.assign(params)

        self._advance(ExecutionState.VALIDATING)
        try:
            self.break_when_invalid()
        except UseCaseFailure as failure:
            self._log.info("validation.failed", errors=self.errors.full_messages)
            return self._finish(Halt.from_failure(failure))

        self._advance(ExecutionState.RUNNING_STEPS)
        try:
            self._determine_record()
        except UseCaseFailure as failure:
            return self._finish(Halt.from_failure(failure))

        result = StepExecutor(self._resolver).execute(self.steps, self, self._log)
        if isinstance(result, Halt):
            return self._finish(result)
        return self._finish(Halt.succeeded())

    def validate(self) -> None:
        """Hook for checks that do not fit a rule; add to ``self.errors``."""

    def valid(self) -> bool:
        """
        Re-run the rules and the ``validate`` hook.

        Only errors from the previous validation are replaced; errors added
        by steps (e.g. a rejected ``save_record``) are kept.
        """
        self.errors.discard(self._rule_errors)
        start = len(self.errors)
        for rule in self.definition.rules:
            rule.check(self, self.errors)
        self.validate()
        self._rule_errors = list(self.errors)[start:]
        return not self._rule_errors

    def break_when_invalid(self) -> bool:
        if self.valid():
            return True
        self.fail(OutcomeCode.VALIDATION_FAILED, ", ".join(e.full_message for e in self._rule_errors))
        return False

    def fail(self, code: Any = None, message: str = "Failed") -> None:
        raise UseCaseFailure(normalize_code(code), message)

    def halt(self, code: Any = None, message: Optional[str] = None) -> Halt:
        return Halt.failed(code=code, message=message)

    def finish(self) -> Halt:
        return Halt.succeeded()

    def save_record(self, record: Optional[PersistableRecord] = None) -> bool:
        """
        Persist ``record`` (default: ``self.record``).

        Returns False when there is nothing to save. A rejected save adds one
        error under the record's type name and fails with ``save_failed``.
        """
        record = record if record is not None else self.record
        if record is None:
            return False
        if record.save():
            return True

        messages = ", ".join(str(m) for m in record.errors())
        self.errors.add(self._record_name(record), messages)
        self._log.warning("record.save_failed", record=self._record_name(record), errors=messages)
        self.fail(OutcomeCode.SAVE_FAILED, messages or f"{type(record).__name__} is not valid")
        return False

    def _record_name(self, record: Any) -> str:
        type_name = getattr(record, "type_name", None)
        if callable(type_name):
            return str(type_name())
        name = type(record).__name__
        return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")

    def _determine_record(self) -> None:
        strategy = self.definition.record_strategy
        if strategy is not None:
            self.record = strategy.resolve(self)

    def _advance(self, new_state: ExecutionState) -> None:
        self.state = transition(self.state, new_state)

    def _finish(self, result: Halt) -> Outcome:
        if result.success:
            self._advance(ExecutionState.SUCCEEDED)
            outcome = Outcome(
                success=True,
                record=self.record,
                errors=self.errors,
            )
        else:
            self._advance(ExecutionState.FAILED)
            self.error_code = result.code
            outcome = Outcome(
                success=False,
                record=self.record,
                errors=self.errors,
                exception=result.failure,
                message=result.message,
                code=result.code,
                failed_step=result.step_name,
            )

        self._log.info(
            "use_case.end",
            state=self.state.value,
            code=outcome.code,
            failed_step=outcome.failed_step,
        )
        return outcome
