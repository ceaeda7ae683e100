"""
Row and column vocabulary shared by the table.

Pure data shapes, frozen and generic over the row value type ``V`` and the
renderer handle type ``L``. Nothing here interprets a row value beyond reading a
named field for projections and sorting.

Notes:
    - Row.id is an int that only has meaning inside the table that produced it.
    - Row.value is opaque: a mapping (dict, TypedDict) or a record with
      attributes (pydantic model, dataclass, named tuple).
    - Column.cell_layout is an opaque renderer handle, passed through verbatim.

Examples:
    >>> from milkytables.core.row import Column, Row, field_value
    >>> row = Row(id=0, value={"name": "Jane", "age": 21})
    >>> field_value(row.value, "age")
    21
    >>> Column(key="age", label="Age").cell_layout is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import ColumnError

__all__ = [
    "RowData",
    "Row",
    "Column",
    "Cell",
    "field_value",
    "as_column",
]

# Mapping-shaped row values; records with attributes are accepted as well.
RowData = Mapping[str, Any]

V = TypeVar("V")
L = TypeVar("L")


@dataclass(frozen=True)
class Row(Generic[V]):
    """
    One stored row.

    Attributes:
        id (int): Identity, unique within the owning table.
        value (V): Row payload; parsed through the schema when one is attached.
    """

    id: int
    value: V


@dataclass(frozen=True)
class Column(Generic[V, L]):
    """
    Column descriptor binding a value field to a header label and a renderer handle.

    Attributes:
        key (str): Field name of the row value.
        label (Any): Header label, usually a str; bindings may use renderable objects.
        cell_layout (L | None): Opaque renderer handle copied into every projected cell.
    """

    key: str
    label: Any
    cell_layout: L | None = None


@dataclass(frozen=True)
class Cell(Generic[L]):
    """One projected cell: the row's value at a column key plus the column's renderer."""

    value: Any
    cell_layout: L | None = None


def field_value(value: Any, key: str) -> Any:
    """
    Read field ``key`` from a row value.

    Args:
        value (Any): Mapping or attribute-bearing record.
        key (str): Field name.

    Returns:
        Any: The field's value, or None when the field is missing.
    """
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def as_column(spec: Column[Any, Any] | Mapping[str, Any]) -> Column[Any, Any]:
    """
    Coerce a column declaration into a Column.

    Args:
        spec (Column | Mapping[str, Any]): A Column, or a mapping with ``key``,
            ``label`` and optional ``cell_layout`` entries (``cellLayout`` is accepted).

    Returns:
        Column: The normalized descriptor.

    Raises:
        ColumnError: If the mapping has no ``key``, has unexpected entries, or the key
            is not a non-empty string.
    """
    if isinstance(spec, Column):
        col = spec
    elif isinstance(spec, Mapping):
        entries = dict(spec)
        if "cellLayout" in entries and "cell_layout" not in entries:
            entries["cell_layout"] = entries.pop("cellLayout")
        extras = sorted(set(entries) - {"key", "label", "cell_layout"})
        if extras:
            raise ColumnError(f"unexpected column entries: {extras!r}")
        if "key" not in entries:
            raise ColumnError(f"column declaration missing 'key': {spec!r}")
        col = Column(
            key=entries["key"],
            label=entries.get("label", entries["key"]),
            cell_layout=entries.get("cell_layout"),
        )
    else:
        raise ColumnError(f"column must be a Column or a mapping, got {type(spec).__name__}")
    if not isinstance(col.key, str) or not col.key:
        raise ColumnError(f"column key must be a non-empty str, got {col.key!r}")
    return col
