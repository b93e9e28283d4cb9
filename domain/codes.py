from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Optional


class OutcomeCode(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"  # generic default when no code was given
    VALIDATION_FAILED = "validation_failed"
    STEP_FALSE = "step_false"
    SAVE_FAILED = "save_failed"


def normalize_code(code: Any) -> Optional[str]:
    """Reduce enum members and other symbols to a plain interned string."""
    if code is None:
        return None
    if isinstance(code, Enum):
        code = code.value
    return sys.intern(str(code))
