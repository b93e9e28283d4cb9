from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from domain.codes import OutcomeCode, normalize_code
from domain.exceptions import UseCaseFailure


@dataclass(frozen=True)
class Continue:
    """The step finished; move on to the next declaration."""


@dataclass(frozen=True)
class Halt:
    """
    The run ends at this step.

    A successful halt comes from a ``success`` step or ``finish()``; a failed
    halt from a ``failure`` step, a falsy action, or a ``UseCaseFailure``.
    """

    success: bool
    code: Optional[str] = None
    message: Optional[str] = None
    step_name: Optional[str] = None
    failure: Optional[UseCaseFailure] = None

    @classmethod
    def succeeded(cls, step_name: Optional[str] = None) -> "Halt":
        return cls(success=True, code=OutcomeCode.SUCCESS.value, step_name=step_name)

    @classmethod
    def failed(
        cls,
        code: Optional[object] = None,
        message: Optional[str] = None,
        step_name: Optional[str] = None,
    ) -> "Halt":
        normalized = normalize_code(code) or OutcomeCode.FAILURE.value
        text = message or "Failed"
        return cls(
            success=False,
            code=normalized,
            message=text,
            step_name=step_name,
            failure=UseCaseFailure(normalized, text),
        )

    @classmethod
    def from_failure(cls, failure: UseCaseFailure, step_name: Optional[str] = None) -> "Halt":
        return cls(
            success=False,
            code=normalize_code(failure.code) or OutcomeCode.FAILURE.value,
            message=failure.message,
            step_name=step_name,
            failure=failure,
        )

    def at(self, step_name: str) -> "Halt":
        if self.step_name is not None:
            return self
        return Halt(
            success=self.success,
            code=self.code,
            message=self.message,
            step_name=step_name,
            failure=self.failure,
        )


CONTINUE = Continue()

StepResult = Union[Continue, Halt]
