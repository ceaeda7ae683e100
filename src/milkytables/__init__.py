"""
milkytables — immutable, schema-validated tables for UI table components.

## Public API
- Table — create / add / update / delete / copy / clear_all / sort_by_column,
  get_rows / get_header_labels projections.
- Row, Column, Cell — row model shapes.
- TableSettings — policies (duplicate column keys, missing sort values).
- ValidationError, RowNotFoundError, ColumnError, GrammarError — errors.

## Examples
```python
from pydantic import BaseModel
from milkytables import Table

class Person(BaseModel):
    name: str
    age: int

t = Table.create(
    rows=[{"name": "John268", "age": 20}, {"name": "Jane", "age": "21"}],
    columns=[{"key": "name", "label": "Name"}, {"key": "age", "label": "Age"}],
    schema=Person,
)
t.add({"name": "Amy", "age": 19}).sort_by_column("age", "asc").get_rows()
```

## References
- Core: milkytables.core
- Polars interop: milkytables.io
- Renderer type aliases: milkytables.bindings
"""

from __future__ import annotations

from .core import (
    Cell,
    Column,
    ColumnError,
    DuplicateKeyPolicy,
    GrammarError,
    NonePosition,
    Row,
    RowNotFoundError,
    SortDirection,
    Table,
    TableError,
    TableSettings,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "Column",
    "ColumnError",
    "DuplicateKeyPolicy",
    "GrammarError",
    "NonePosition",
    "Row",
    "RowNotFoundError",
    "SortDirection",
    "Table",
    "TableError",
    "TableSettings",
    "ValidationError",
    "__version__",
]
