"""
Core exception types raised by table operations, schema validation, and grammar helpers.

Provides typed exceptions for table-domain failures:
- ValidationError when a row value is rejected by the table's schema.
- RowNotFoundError when an operation requires a row id that is not present.
- ColumnError for malformed, duplicate, or unknown column keys.
- GrammarError for enum-like tokens (sort direction, settings policies) that do not normalize.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Every error derives from TableError so callers can catch the whole family.
    - Errors are raised before a new table is built; the receiving table is never
      partially changed.

Examples:
    Catch a failed copy.

    >>> from milkytables.core.errors import RowNotFoundError
    >>> try:
    ...     raise RowNotFoundError(7)
    ... except LookupError as e:
    ...     e.row_id
    7
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "TableError",
    "ValidationError",
    "RowNotFoundError",
    "ColumnError",
    "GrammarError",
]


class TableError(Exception):
    """Base class for milkytables errors."""


class ValidationError(TableError, ValueError):
    """
    A row value failed schema validation.

    Attributes:
        value (Any): The raw value supplied by the caller.
        diagnostic (Any): Validator-specific description of the mismatch. For pydantic
            schemas this is the list returned by ``pydantic.ValidationError.errors()``.
    """

    def __init__(self, value: Any, diagnostic: Any) -> None:
        self.value = value
        self.diagnostic = diagnostic
        super().__init__(f"row value failed validation: {diagnostic}")


class RowNotFoundError(TableError, LookupError):
    """
    No row with the requested id exists in the table.

    Attributes:
        row_id (int): The id that was looked up.
    """

    def __init__(self, row_id: int) -> None:
        self.row_id = row_id
        super().__init__(f"row not found: id={row_id!r}")


class ColumnError(TableError, ValueError):
    """Column declaration or column key failure (duplicate, unknown, or malformed)."""


class GrammarError(TableError, ValueError):
    """Enum-like token failed normalization (e.g., an unknown sort direction)."""
