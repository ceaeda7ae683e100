"""Type aliases for tables rendered as plain text (terminals, logs, fixed-width reports)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from milkytables.core.row import Cell, Column
from milkytables.core.table import Table

__all__ = ["TextCellLayout", "TextColumn", "TextCell", "TextTable"]

# Formatter from cell value to display string, e.g. "{:,.2f}".format
TextCellLayout = Callable[[Any], str]
TextColumn = Column[Any, TextCellLayout]
TextCell = Cell[TextCellLayout]
TextTable = Table[Any, TextCellLayout]
