"""
Type aliases for tables rendered with streamlit.

A streamlit cell renderer receives the cell value and draws it, e.g. ``st.write``
or ``lambda v: st.progress(v / 100)``. The table never calls it; the UI layer does.

Examples:
    >>> from milkytables.bindings.streamlit import StreamlitColumn, StreamlitTable
    >>> t = StreamlitTable.create(
    ...     rows=[{"name": "Amy", "score": 91}],
    ...     columns=[StreamlitColumn(key="score", label="**Score**", cell_layout=print)],
    ... )
    >>> t.get_rows()[0]["score"].cell_layout is print
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from milkytables.core.row import Cell, Column
from milkytables.core.table import Table

__all__ = ["StreamlitCellLayout", "StreamlitColumn", "StreamlitCell", "StreamlitTable"]

StreamlitCellLayout = Callable[[Any], Any]
StreamlitColumn = Column[Any, StreamlitCellLayout]
StreamlitCell = Cell[StreamlitCellLayout]
StreamlitTable = Table[Any, StreamlitCellLayout]
