from domain.validation.errors import BASE, ErrorEntry, Errors, FrozenErrors, humanize
from domain.validation.rules import (
    LengthRule,
    PredicateRule,
    PresenceRule,
    ValidationRule,
    is_blank,
    length,
    presence,
    satisfies,
)

__all__ = [
    "BASE",
    "ErrorEntry",
    "Errors",
    "FrozenErrors",
    "humanize",
    "ValidationRule",
    "PresenceRule",
    "LengthRule",
    "PredicateRule",
    "is_blank",
    "presence",
    "length",
    "satisfies",
]
