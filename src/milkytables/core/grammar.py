"""
Canonical milkytables grammar and helpers.

Defines the enum-like tokens accepted by table operations and settings (sort
direction, duplicate column key policy, placement of missing sort values) and the
zero-IO helpers that normalize free-form strings into them.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (settings files, env vars, call sites): lower_snake

2) Lenient in, canonical out:
   - Normalizers accept enum members or strings in any case with surrounding
     whitespace, and return the enum member.
   - Anything else raises GrammarError.

Downstream usage
----------------
- Table.sort_by_column normalizes ``direction`` via ``sort_direction_from_value``.
- TableSettings normalizes its policy fields on construction and when loading
  env/TOML values.

Examples
--------
>>> from milkytables.core.grammar import sort_direction_from_value, SortDirection
>>> sort_direction_from_value("DESC") is SortDirection.DESC
True
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .errors import GrammarError

__all__ = [
    "SortDirection",
    "DuplicateKeyPolicy",
    "NonePosition",
    "sort_direction_from_value",
    "duplicate_key_policy_from_value",
    "none_position_from_value",
]

_E = TypeVar("_E", bound=Enum)


class SortDirection(Enum):
    """
    Direction accepted by Table.sort_by_column.

    Notes:
      DESC is the ASC ordering reversed; ties keep their prior order either way.
    """

    ASC = "asc"
    DESC = "desc"


class DuplicateKeyPolicy(Enum):
    """
    What Table.create does when two columns share a key.

    Notes:
      FORBID raises ColumnError at construction. LAST_WRITE_WINS keeps both
      columns; projections keyed by column key then hold the later column.
    """

    FORBID = "forbid"
    LAST_WRITE_WINS = "last_write_wins"


class NonePosition(Enum):
    """Where rows with a missing (None or NaN) sort value are placed, for either direction."""

    FIRST = "first"
    LAST = "last"


def _enum_from_value(enum_cls: type[_E], value: _E | str, what: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    token = value.strip().lower() if isinstance(value, str) else value
    allowed = [m.value for m in enum_cls]
    if token not in allowed:
        raise GrammarError(f"{what} must be one of {allowed} (got {value!r})")
    return enum_cls(token)


def sort_direction_from_value(value: SortDirection | str) -> SortDirection:
    """
    Normalize a sort direction token.

    Args:
      value (SortDirection | str): Enum member or case-insensitive "asc"/"desc".

    Returns:
      SortDirection: Parsed direction.

    Raises:
      GrammarError: If the token is not a known direction.
    """
    return _enum_from_value(SortDirection, value, "sort direction")


def duplicate_key_policy_from_value(value: DuplicateKeyPolicy | str) -> DuplicateKeyPolicy:
    """Normalize a duplicate column key policy token ("forbid" | "last_write_wins")."""
    return _enum_from_value(DuplicateKeyPolicy, value, "duplicate_column_keys")


def none_position_from_value(value: NonePosition | str) -> NonePosition:
    """Normalize a missing-value placement token ("first" | "last")."""
    return _enum_from_value(NonePosition, value, "none_position")


