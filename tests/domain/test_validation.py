from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from domain.validation import Errors, humanize, is_blank, length, presence, satisfies


@dataclass
class Draft:
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None


def test_humanize_field_names() -> None:
    assert humanize("author") == "Author"
    assert humanize("payment_type") == "Payment type"
    assert humanize("user_id") == "User"


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank([])
    assert not is_blank("x")
    assert not is_blank(0)


def test_presence_reports_each_blank_field_in_order() -> None:
    errors = Errors()

    presence("title", "content", "author").check(Draft(content="body"), errors)

    assert errors.full_messages == ["Title can't be blank", "Author can't be blank"]
    assert errors["author"] == ["can't be blank"]


def test_presence_accepts_filled_fields() -> None:
    errors = Errors()

    presence("title").check(Draft(title="Hello"), errors)

    assert not errors


def test_length_rule() -> None:
    errors = Errors()

    length("title", minimum=3, maximum=5).check(Draft(title="Hi"), errors)
    length("content", maximum=2).check(Draft(content="long"), errors)
    length("author", minimum=1).check(Draft(), errors)

    assert errors.full_messages == [
        "Title is too short (minimum is 3 characters)",
        "Content is too long (maximum is 2 characters)",
    ]


def test_satisfies_rule_defaults_to_base() -> None:
    errors = Errors()

    satisfies(lambda d: d.title != d.content, "Title must differ from content").check(
        Draft(title="same", content="same"), errors
    )

    assert errors.full_messages == ["Title must differ from content"]
    assert "base" in errors


def test_errors_collection() -> None:
    errors = Errors()
    errors.add("order", "")
    errors.add("order", "is invalid")

    assert len(errors) == 2
    assert errors.full_messages == ["Order ", "Order is invalid"]
    assert errors.to_dict() == {"order": ["", "is invalid"]}

    copy = errors.snapshot()
    errors.clear()

    assert not errors
    assert len(copy) == 2

    with pytest.raises(TypeError):
        copy.add("order", "is late")
    with pytest.raises(TypeError):
        copy.clear()


def test_discard_removes_only_the_given_entries() -> None:
    errors = Errors()
    first = errors.add("title", "can't be blank")
    errors.add("title", "can't be blank")

    errors.discard([first])

    assert len(errors) == 1
    assert list(errors)[0] is not first
