"""
Core package aggregator for milkytables (row model, table, validation, settings).

## Contracts
- Row model — frozen Row / Column / Cell shapes; field_value reads row fields.
- Table — immutable container; every mutation returns a new Table.
- Validation — parse-or-fail adapters over pydantic models, TypeAdapters and callables.
- Grammar — SortDirection and policy enums with lenient normalizers.
- Settings — TableSettings (env > TOML > defaults).
- Errors — TableError family.

## Notes
- Zero-IO apart from TableSettings.load reading TOML; stdlib + pydantic only.
- Single-threaded and synchronous; safety for concurrent readers comes from immutability.
"""

from __future__ import annotations

from .errors import ColumnError, GrammarError, RowNotFoundError, TableError, ValidationError
from .grammar import DuplicateKeyPolicy, NonePosition, SortDirection
from .row import Cell, Column, Row, RowData, field_value
from .settings import TableSettings
from .table import Table, next_id
from .validation import Validator, resolve_validator

__all__ = [
    "Cell",
    "Column",
    "ColumnError",
    "DuplicateKeyPolicy",
    "GrammarError",
    "NonePosition",
    "Row",
    "RowData",
    "RowNotFoundError",
    "SortDirection",
    "Table",
    "TableError",
    "TableSettings",
    "ValidationError",
    "Validator",
    "field_value",
    "next_id",
    "resolve_validator",
]
