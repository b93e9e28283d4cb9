from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

BASE = "base"


def humanize(field: str) -> str:
    text = field.replace("_", " ").strip()
    if text.endswith(" id"):
        text = text[:-3]
    return text[:1].upper() + text[1:]


@dataclass(frozen=True)
class ErrorEntry:
    field: str
    message: str

    @property
    def full_message(self) -> str:
        if self.field == BASE:
            return self.message
        return f"{humanize(self.field)} {self.message}"


class Errors:
    """
    Ordered collection of (field, message) validation failures.

    Entries keep insertion order; ``full_messages`` prefixes each message with
    the humanized field name ("author" + "can't be blank" -> "Author can't be blank").
    """

    def __init__(self) -> None:
        self._entries: List[ErrorEntry] = []

    def add(self, field: str, message: str) -> ErrorEntry:
        entry = ErrorEntry(field=str(field), message=message)
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def discard(self, entries: Iterable[ErrorEntry]) -> None:
        """Remove exactly these entries; equal entries added elsewhere stay."""
        drop = {id(e) for e in entries}
        self._entries = [e for e in self._entries if id(e) not in drop]

    def __getitem__(self, field: str) -> List[str]:
        return [e.message for e in self._entries if e.field == field]

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, field: object) -> bool:
        return any(e.field == field for e in self._entries)

    def __repr__(self) -> str:
        return f"Errors({self.full_messages!r})"

    @property
    def full_messages(self) -> List[str]:
        return [e.full_message for e in self._entries]

    def to_dict(self) -> dict:
        out: dict = {}
        for e in self._entries:
            out.setdefault(e.field, []).append(e.message)
        return out

    def snapshot(self) -> "FrozenErrors":
        return FrozenErrors(self._entries)


class FrozenErrors(Errors):
    """Read-only copy of an ``Errors`` collection, as carried by an Outcome."""

    def __init__(self, entries: Iterable[ErrorEntry] = ()) -> None:
        super().__init__()
        self._entries = list(entries)

    def add(self, field: str, message: str) -> ErrorEntry:
        raise TypeError("Errors snapshot is read-only")

    def clear(self) -> None:
        raise TypeError("Errors snapshot is read-only")

    def discard(self, entries: Iterable[ErrorEntry]) -> None:
        raise TypeError("Errors snapshot is read-only")
