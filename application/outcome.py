from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from domain.codes import OutcomeCode, normalize_code
from domain.exceptions import UseCaseFailure
from domain.validation.errors import Errors, FrozenErrors


@dataclass(frozen=True)
class Outcome:
    """
    Result of running a use case.

    ``message`` falls back to the exception message, then to the joined
    validation errors. ``code`` is ``"success"`` for successful runs and the
    failure code (``"failure"`` when none was given) otherwise.
    """

    success: bool
    record: Any = None
    errors: Errors = field(default_factory=FrozenErrors)
    exception: Optional[UseCaseFailure] = None
    message: Optional[str] = None
    code: Optional[str] = None
    failed_step: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", self.errors.snapshot())
        object.__setattr__(self, "message", self._resolve_message())
        object.__setattr__(self, "code", self._resolve_code())

    @property
    def failed(self) -> bool:
        return not self.success

    def _resolve_message(self) -> Optional[str]:
        if self.message:
            return self.message
        if self.exception is not None and self.exception.message:
            return self.exception.message
        if self.errors:
            return ", ".join(self.errors.full_messages)
        return None

    def _resolve_code(self) -> Optional[str]:
        if self.success:
            return OutcomeCode.SUCCESS.value
        code = normalize_code(self.code)
        if code is None and self.exception is not None:
            code = normalize_code(self.exception.code)
        return code or OutcomeCode.FAILURE.value
