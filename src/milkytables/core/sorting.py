"""
Deterministic ordering of column values for Table.sort_by_column.

Native ``<``/``>`` comparison is partial in Python (mixed types raise TypeError,
NaN compares false both ways). This module turns it into a deterministic ordering
so a stable sort over it is well defined.

Ordering rules
1) Missing values (None, and NaN of float or Decimal) never reach the comparator;
   Table places them according to TableSettings.none_position.
2) Values are grouped by family: all real numbers (bool, int, float, Decimal,
   Fraction) form the "number" family; any other value forms a family named by
   its type's module and qualified name. Numbers come first, then the other
   families by name.
3) Within a family, values compare natively. Pairs that raise TypeError, or that
   are neither less, greater nor equal, fall back to ``(type qualname, repr)``.
4) Ties keep their prior relative order (Python's sort is stable, including with
   ``reverse=True``).
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from decimal import Decimal
from numbers import Real
from typing import Any

__all__ = [
    "is_missing",
    "value_family",
    "compare_values",
    "sort_key",
]

_NUMBER_FAMILY = "number"


def _is_number(value: Any) -> bool:
    # Decimal is not registered as numbers.Real
    return isinstance(value, (Real, Decimal))


def is_missing(value: Any) -> bool:
    """True for None and for numeric NaN, the values kept out of comparisons."""
    if value is None:
        return True
    if isinstance(value, Decimal):
        # sNaN raises on comparison
        return value.is_nan()
    return _is_number(value) and value != value


def value_family(value: Any) -> str:
    """Name of the ordering family of ``value``."""
    if _is_number(value):
        return _NUMBER_FAMILY
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _family_rank(value: Any) -> tuple[int, str]:
    family = value_family(value)
    return (0 if family == _NUMBER_FAMILY else 1, family)


def _fallback_key(value: Any) -> tuple[str, str]:
    return (type(value).__qualname__, repr(value))


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way comparison following the module ordering rules.

    Returns:
        int: -1 if a sorts before b, 1 if after, 0 for a tie.
    """
    fa, fb = _family_rank(a), _family_rank(b)
    if fa != fb:
        return -1 if fa < fb else 1
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        if a == b:
            return 0
    except TypeError:
        pass
    ka, kb = _fallback_key(a), _fallback_key(b)
    return (ka > kb) - (ka < kb)


def sort_key(extract: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Build a ``key=`` callable for ``sorted`` that orders items by ``extract(item)``.

    Args:
        extract (Callable[[Any], Any]): Maps an item (e.g., a Row) to its sort value.

    Returns:
        Callable[[Any], Any]: Key function usable with ``sorted``/``list.sort``.
    """
    cmp_key = functools.cmp_to_key(compare_values)
    return lambda item: cmp_key(extract(item))
