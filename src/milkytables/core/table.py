"""
Immutable, optionally schema-validated table of identified rows.

Table owns an ordered tuple of Rows and a tuple of Column descriptors. Every
operation that changes the logical table returns a new Table and leaves the
receiver, and anything derived from it, untouched.

Responsibilities
- Row identity: new id = max(existing ids) + 1, or 0 for an empty table. Ids depend
  only on the current rows; there is no hidden counter.
- Copy-on-write mutation: add, update, delete, copy, clear_all, sort_by_column.
- Schema gate: with a validator attached, every stored value went through parse;
  raw caller input is never stored.
- Projections: get_rows (cells per column) and get_header_labels.

Error policy
- ValidationError from create/add/update; no table is produced.
- RowNotFoundError from copy when the id is absent.
- update/delete with an absent id return a row-equal table (no error).
- ColumnError for duplicate column keys (FORBID policy) or keys unknown to the schema.

Notes
- Tables are frozen dataclasses over tuples; equality compares rows and columns only.
- Branching lineages that each add a row produce colliding ids; merging lineages is
  unsupported.

Examples
--------
>>> from milkytables import Table
>>> t = Table.create(
...     rows=[{"name": "John268", "age": 20}, {"name": "Jane", "age": 21}],
...     columns=[{"key": "name", "label": "Name"}, {"key": "age", "label": "Age"}],
... )
>>> t = t.add({"name": "Amy", "age": 19}).sort_by_column("age", "asc")
>>> [row.id for row in t]
[2, 0, 1]
>>> t.get_header_labels()
{'name': 'Name', 'age': 'Age'}
"""

from __future__ import annotations

import copy as _copy
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from .errors import ColumnError, RowNotFoundError
from .grammar import DuplicateKeyPolicy, NonePosition, SortDirection, sort_direction_from_value
from .row import Cell, Column, Row, as_column, field_value
from .settings import TableSettings
from .sorting import is_missing, sort_key
from .validation import Validator, resolve_validator

__all__ = ["Table", "next_id"]

logger = logging.getLogger(__name__)

V = TypeVar("V")
L = TypeVar("L")


def next_id(rows: Iterable[Row[Any]]) -> int:
    """Id for the next row: one past the largest existing id, or 0 when there are none."""
    return max((row.id for row in rows), default=-1) + 1


@dataclass(frozen=True)
class Table(Generic[V, L]):
    """
    Immutable table of rows with a column projection.

    Attributes:
        rows (tuple[Row[V], ...]): Rows in insertion order, or in sorted order right
            after sort_by_column.
        columns (tuple[Column[V, L], ...]): Column descriptors in declaration order.
        validator (Validator[V] | None): Schema gate applied by create/add/update.
        settings (TableSettings): Policies carried unchanged through the lineage.

    Notes:
        Build tables with Table.create; the constructor performs no validation.
    """

    rows: tuple[Row[V], ...] = ()
    columns: tuple[Column[V, L], ...] = ()
    validator: Validator[V] | None = field(default=None, compare=False)
    settings: TableSettings = field(default_factory=TableSettings, compare=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        rows: Iterable[Any] = (),
        columns: Iterable[Column[Any, Any] | Mapping[str, Any]] = (),
        schema: Any = None,
        settings: TableSettings | None = None,
    ) -> Table[Any, Any]:
        """
        Build a table from raw row values and column declarations.

        Args:
            rows (Iterable[Any]): Row values, in order.
            columns (Iterable[Column | Mapping]): Column declarations; mappings take
                ``key``, ``label`` and optional ``cell_layout``.
            schema (Any): Optional schema, anything accepted by resolve_validator.
            settings (TableSettings | None): Policies; defaults to TableSettings().

        Returns:
            Table: New table whose rows carry ids 0..n-1 in input order.

        Raises:
            ValidationError: If any row value fails the schema; no table is produced.
            ColumnError: If a column is malformed, duplicates a key under the FORBID
                policy, or names a field the schema does not declare.
        """
        settings = settings or TableSettings()
        validator = resolve_validator(schema)
        cols = tuple(as_column(c) for c in columns)

        if settings.duplicate_column_keys is DuplicateKeyPolicy.FORBID:
            seen: set[str] = set()
            dupes: list[str] = []
            for c in cols:
                if c.key in seen:
                    dupes.append(c.key)
                seen.add(c.key)
            if dupes:
                raise ColumnError(f"duplicate column keys: {dupes!r}")

        fields = getattr(validator, "field_names", None)
        if settings.check_column_keys and fields is not None:
            unknown = [c.key for c in cols if c.key not in fields]
            if unknown:
                raise ColumnError(
                    f"column keys not declared by schema: {unknown!r} (fields={sorted(fields)!r})"
                )

        parse = validator.parse if validator is not None else (lambda raw: raw)
        stored = tuple(Row(id=i, value=parse(raw)) for i, raw in enumerate(rows))

        logger.debug(
            "table.create",
            extra={"n_rows": len(stored), "n_columns": len(cols), "validator": repr(validator)},
        )
        return cls(rows=stored, columns=cols, validator=validator, settings=settings)

    # ------------------------------------------------------------------
    # Read-only access
    # ------------------------------------------------------------------

    @property
    def schema(self) -> Validator[V] | None:
        return self.validator

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(row.id for row in self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row[V]]:
        return iter(self.rows)

    def get(self, row_id: int) -> Row[V] | None:
        """Return the row with ``row_id``, or None."""
        return next((row for row in self.rows if row.id == row_id), None)

    # ------------------------------------------------------------------
    # Mutations (each returns a new Table)
    # ------------------------------------------------------------------

    def _parse(self, raw: Any) -> V:
        if self.validator is None:
            return raw
        return self.validator.parse(raw)

    def _with_rows(self, rows: Iterable[Row[V]]) -> Table[V, L]:
        return replace(self, rows=tuple(rows))

    def add(self, value: Any) -> Table[V, L]:
        """
        Append a row.

        Raises:
            ValidationError: If ``value`` fails the schema.
        """
        row = Row(id=next_id(self.rows), value=self._parse(value))
        logger.debug("table.add", extra={"row_id": row.id})
        return self._with_rows((*self.rows, row))

    def update(self, row_id: int, value: Any) -> Table[V, L]:
        """
        Replace the value of the row with ``row_id``, keeping its position.

        The value is validated first, so a bad value raises even when the id is absent.
        An absent id yields a row-equal table.

        Raises:
            ValidationError: If ``value`` fails the schema.
        """
        parsed = self._parse(value)
        if self.get(row_id) is None:
            logger.debug("table.update.missing", extra={"row_id": row_id})
        return self._with_rows(
            Row(id=row.id, value=parsed) if row.id == row_id else row for row in self.rows
        )

    def delete(self, row_id: int) -> Table[V, L]:
        """Remove the row with ``row_id``; an absent id yields a row-equal table."""
        logger.debug("table.delete", extra={"row_id": row_id})
        return self._with_rows(row for row in self.rows if row.id != row_id)

    def copy(self, row_id: int) -> Table[V, L]:
        """
        Append a duplicate of the row with ``row_id`` under the next id.

        The duplicate always goes to the end, not next to its source. Its value is a
        deep copy, so the two rows share no mutable state.

        Raises:
            RowNotFoundError: If no row has ``row_id``.
        """
        source = self.get(row_id)
        if source is None:
            logger.debug("table.copy.missing", extra={"row_id": row_id})
            raise RowNotFoundError(row_id)
        row = Row(id=next_id(self.rows), value=_copy.deepcopy(source.value))
        logger.debug("table.copy", extra={"row_id": row_id, "new_row_id": row.id})
        return self._with_rows((*self.rows, row))

    def clear_all(self) -> Table[V, L]:
        """Drop every row; columns, validator and settings are kept."""
        return self._with_rows(())

    def sort_by_column(
        self, column_key: str, direction: SortDirection | str = SortDirection.ASC
    ) -> Table[V, L]:
        """
        Stable sort of the rows by the value at ``column_key``.

        Args:
            column_key (str): Field of the row value to sort by. It need not be a
                declared column.
            direction (SortDirection | str): "asc" or "desc" (case-insensitive).

        Returns:
            Table: New table with reordered rows. Sorting never validates.

        Raises:
            GrammarError: If ``direction`` is unknown.
            ColumnError: If the schema declares its fields and ``column_key`` is not one.

        Notes:
            Rows whose value is None, NaN or missing go to the end (or the start, per
            settings.none_position) in their prior order. Mixed types are ordered by
            type family; see milkytables.core.sorting.
        """
        direction = sort_direction_from_value(direction)
        fields = getattr(self.validator, "field_names", None)
        if self.settings.check_column_keys and fields is not None and column_key not in fields:
            raise ColumnError(f"cannot sort by {column_key!r}: not a schema field")

        present: list[Row[V]] = []
        missing: list[Row[V]] = []
        for row in self.rows:
            (missing if is_missing(field_value(row.value, column_key)) else present).append(row)

        ordered = sorted(
            present,
            key=sort_key(lambda row: field_value(row.value, column_key)),
            reverse=direction is SortDirection.DESC,
        )
        if self.settings.none_position is NonePosition.FIRST:
            ordered = missing + ordered
        else:
            ordered = ordered + missing

        logger.debug(
            "table.sort",
            extra={"column_key": column_key, "direction": direction.value, "n_missing": len(missing)},
        )
        return self._with_rows(ordered)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def get_rows(self) -> list[dict[str, Cell[L]]]:
        """
        Display projection: one mapping per row from column key to Cell.

        Keys follow column declaration order. With duplicate column keys (only possible
        under LAST_WRITE_WINS), the later column's cell replaces the earlier one.
        """
        return [
            {
                col.key: Cell(value=field_value(row.value, col.key), cell_layout=col.cell_layout)
                for col in self.columns
            }
            for row in self.rows
        ]

    def get_header_labels(self) -> dict[str, Any]:
        """Mapping from column key to label, in column order; later duplicates win."""
        return {col.key: col.label for col in self.columns}
