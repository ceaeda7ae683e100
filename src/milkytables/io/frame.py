"""
Polars DataFrame interop for milkytables tables.

Overview
- rows_to_frame(): the get_rows() projection as a DataFrame (cell values only).
- table_from_frame(): Table.create over the rows of a DataFrame.

Notes
- Labels and cell renderers are presentation; they do not survive into a frame.
- Nothing is read from or written to disk here.
- Duplicate column keys (LAST_WRITE_WINS) collapse to one frame column, matching
  the get_rows projection.

Examples
--------
>>> from milkytables import Table
>>> t = Table.create(rows=[{"name": "Amy", "age": 19}], columns=[{"key": "age", "label": "Age"}])
>>> rows_to_frame(t).columns
['id', 'age']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import polars as pl

from milkytables.core.row import Column, field_value
from milkytables.core.settings import TableSettings
from milkytables.core.table import Table

from .errors import FrameError

__all__ = ["rows_to_frame", "table_from_frame"]

logger = logging.getLogger(__name__)


def rows_to_frame(
    table: Table[Any, Any],
    *,
    include_id: bool = True,
    id_column: str = "id",
) -> pl.DataFrame:
    """
    Materialize a table's cell values as a polars DataFrame.

    Args:
        table (Table): Source table; it is not modified.
        include_id (bool): Prepend an Int64 column holding row ids.
        id_column (str): Name of the id column.

    Returns:
        pl.DataFrame: One row per table row, in table order; columns are the id column
        (if included) followed by column keys in declaration order.

    Raises:
        FrameError: If ``id_column`` collides with a column key, or polars cannot build
            a column from the values.
    """
    keys = list(dict.fromkeys(col.key for col in table.columns))
    if include_id and id_column in keys:
        raise FrameError(f"id column {id_column!r} collides with a column key")

    series: list[pl.Series] = []
    if include_id:
        series.append(pl.Series(id_column, list(table.ids), dtype=pl.Int64))
    for key in keys:
        values = [field_value(row.value, key) for row in table.rows]
        try:
            series.append(pl.Series(key, values, strict=False))
        except (TypeError, ValueError, pl.exceptions.PolarsError) as exc:
            raise FrameError(f"failed to build frame column {key!r}: {exc}") from exc

    logger.debug("frame.export", extra={"n_rows": len(table), "n_columns": len(series)})
    return pl.DataFrame(series)


def table_from_frame(
    df: pl.DataFrame,
    *,
    columns: Iterable[Column[Any, Any] | Mapping[str, Any]] | None = None,
    schema: Any = None,
    settings: TableSettings | None = None,
    id_column: str | None = None,
) -> Table[Any, Any]:
    """
    Build a table from the rows of a DataFrame.

    Args:
        df (pl.DataFrame): Source frame; each row becomes one row value (a dict).
        columns (Iterable[Column | Mapping] | None): Column declarations. When None,
            one column per frame column is declared, labelled with its name.
        schema (Any): Optional schema applied to every row, as in Table.create.
        settings (TableSettings | None): Table policies.
        id_column (str | None): Frame column holding previously exported ids. It is
            dropped before row values are built; new ids are assigned 0..n-1.

    Returns:
        Table: New table over the frame's rows, in frame order.

    Raises:
        FrameError: If a declared column key is not a frame column.
        ValidationError: If a row fails the schema.
        ColumnError: As raised by Table.create.
    """
    if id_column is not None and id_column in df.columns:
        df = df.drop(id_column)

    if columns is None:
        cols: list[Column[Any, Any] | Mapping[str, Any]] = [
            Column(key=name, label=name) for name in df.columns
        ]
    else:
        cols = list(columns)
        declared = [c.key if isinstance(c, Column) else c.get("key") for c in cols]
        missing = [k for k in declared if k not in df.columns]
        if missing:
            raise FrameError(f"missing frame columns: {missing!r} (have={df.columns!r})")

    logger.debug("frame.import", extra={"n_rows": df.height, "n_columns": len(cols)})
    return Table.create(rows=df.to_dicts(), columns=cols, schema=schema, settings=settings)
