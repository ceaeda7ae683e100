import re

import pytest

from milkytables.core.errors import GrammarError
from milkytables.core.grammar import (
    DuplicateKeyPolicy,
    NonePosition,
    SortDirection,
    duplicate_key_policy_from_value,
    none_position_from_value,
    sort_direction_from_value,
)

_LOWER_SNAKE = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


@pytest.mark.parametrize("enum_cls", [SortDirection, DuplicateKeyPolicy, NonePosition])
def test_all_enum_values_are_lower_snake(enum_cls: type) -> None:
    for member in enum_cls:
        assert _LOWER_SNAKE.match(member.value), f"{enum_cls.__name__}.{member.name}"


def test_normalizers_accept_members_and_strings() -> None:
    assert sort_direction_from_value(SortDirection.ASC) is SortDirection.ASC
    assert sort_direction_from_value("Desc") is SortDirection.DESC
    assert duplicate_key_policy_from_value("LAST_WRITE_WINS") is DuplicateKeyPolicy.LAST_WRITE_WINS
    assert none_position_from_value("first") is NonePosition.FIRST


@pytest.mark.parametrize("bad", ["ascending", "", None, 1])
def test_sort_direction_rejects_unknown(bad: object) -> None:
    with pytest.raises(GrammarError):
        sort_direction_from_value(bad)  # type: ignore[arg-type]
