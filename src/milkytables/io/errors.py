"""
Custom exceptions for the milkytables.io module.

Purpose
- Provide interop-specific error types, distinct from the core table errors.
- Keep milkytables.core.errors the source of truth for validation, row and column errors.

Notes
- These exceptions perform no IO and are stdlib-only.
"""

from __future__ import annotations

from milkytables.core.errors import TableError


class FrameError(TableError):
    """
    Raised when a table cannot be converted to or from a polars DataFrame.

    Examples:
        - A declared column key is missing from the source frame
        - The id column name collides with a column key
        - polars cannot build a column from the projected values
    """
