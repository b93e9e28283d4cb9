from __future__ import annotations

from typing import Optional


class UseCaseLibraryError(Exception):
    pass


class UseCaseFailure(UseCaseLibraryError):
    """
    Sanctioned business failure raised from step bodies and helpers.

    Only this error is turned into a failed Outcome by the engine. Every
    other exception raised by a step escapes ``call``.
    """

    def __init__(self, code: Optional[str] = None, message: str = "Failed") -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class StepDefinitionError(UseCaseLibraryError):
    pass


class StepResolutionError(UseCaseLibraryError):
    pass


class InvalidStateTransition(UseCaseLibraryError):
    pass


class ConfigError(UseCaseLibraryError):
    pass
