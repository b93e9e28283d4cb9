from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from domain.validation.errors import BASE, Errors


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


class ValidationRule(ABC):
    @abstractmethod
    def check(self, subject: Any, errors: Errors) -> None:
        """Append every failure found on ``subject`` to ``errors``."""
        ...


@dataclass(frozen=True)
class PresenceRule(ValidationRule):
    fields: Tuple[str, ...]
    message: str = "can't be blank"

    def check(self, subject: Any, errors: Errors) -> None:
        for field in self._find_blank_fields(subject):
            errors.add(field, self.message)

    def _find_blank_fields(self, subject: Any) -> List[str]:
        blank: List[str] = []
        for field in self.fields:
            if is_blank(getattr(subject, field, None)):
                blank.append(field)
        return blank


@dataclass(frozen=True)
class LengthRule(ValidationRule):
    field: str
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def check(self, subject: Any, errors: Errors) -> None:
        value = getattr(subject, self.field, None)
        if value is None:
            return
        size = len(value)
        if self.minimum is not None and size < self.minimum:
            errors.add(self.field, f"is too short (minimum is {self.minimum} characters)")
        if self.maximum is not None and size > self.maximum:
            errors.add(self.field, f"is too long (maximum is {self.maximum} characters)")


@dataclass(frozen=True)
class PredicateRule(ValidationRule):
    predicate: Callable[[Any], Any]
    message: str
    field: str = BASE

    def check(self, subject: Any, errors: Errors) -> None:
        if not self.predicate(subject):
            errors.add(self.field, self.message)


def presence(*fields: str, message: str = "can't be blank") -> PresenceRule:
    return PresenceRule(fields=tuple(fields), message=message)


def length(field: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> LengthRule:
    return LengthRule(field=field, minimum=minimum, maximum=maximum)


def satisfies(predicate: Callable[[Any], Any], message: str, field: str = BASE) -> PredicateRule:
    return PredicateRule(predicate=predicate, message=message, field=field)
