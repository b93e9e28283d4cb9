from __future__ import annotations

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class PersistableRecord(Protocol):
    """What ``UseCase.save_record`` needs from a domain record."""

    def save(self) -> bool:
        ...

    def errors(self) -> List[str]:
        ...

    def type_name(self) -> str:
        ...
