"""
milkytables.io — interop between tables and polars DataFrames.

## Public API
- rows_to_frame — the get_rows() projection as a polars DataFrame.
- table_from_frame — Table.create over the rows of a DataFrame.
- FrameError — conversion failures.

## Import DAG discipline
- Depends only on stdlib, polars, and milkytables.core.*.
- Never reads or writes files; persistence is out of scope.
"""

from __future__ import annotations

from .errors import FrameError
from .frame import rows_to_frame, table_from_frame

__all__ = ["FrameError", "rows_to_frame", "table_from_frame"]
