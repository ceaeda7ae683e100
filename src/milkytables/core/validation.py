"""
Schema validators for row values.

A validator is anything with ``parse(raw) -> value`` that either returns a
conforming (possibly coerced) value or raises ValidationError carrying the raw
value and a diagnostic. ``resolve_validator`` adapts the schema forms accepted by
Table.create into that contract.

Accepted schema forms
- pydantic BaseModel subclass: parsed with ``model_validate``; stored values are model instances.
- pydantic TypeAdapter: parsed with ``validate_python``.
- Any other type or typing form (TypedDict, dataclass, ``dict[str, int]``): wrapped in a TypeAdapter.
  Before Python 3.12 pydantic needs ``typing_extensions.TypedDict``.
- An object exposing ``parse(raw)`` (schema-library style): used as-is.
- A plain function ``raw -> value``.

Notes:
    - Validation is synchronous and CPU-only; validators must not perform IO.
    - pydantic failures carry ``exc.errors()`` as the diagnostic; ValueError/TypeError
      from custom validators carry ``str(exc)``. Other exceptions propagate unchanged.
    - ``field_names`` is exposed when the schema declares its fields (BaseModel,
      TypedDict); Table uses it to check column keys.

Examples:
    >>> from pydantic import BaseModel
    >>> class Person(BaseModel):
    ...     name: str
    ...     age: int
    >>> v = resolve_validator(Person)
    >>> v.parse({"name": "Amy", "age": "19"}).age
    19
    >>> sorted(v.field_names)
    ['age', 'name']
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

import pydantic
from pydantic import BaseModel, TypeAdapter
from typing_extensions import is_typeddict

from .errors import ValidationError

__all__ = [
    "Validator",
    "ModelValidator",
    "AdapterValidator",
    "CallableValidator",
    "resolve_validator",
]

logger = logging.getLogger(__name__)

V = TypeVar("V")
V_co = TypeVar("V_co", covariant=True)


@runtime_checkable
class Validator(Protocol[V_co]):
    """Parse-or-fail capability attached to a table."""

    def parse(self, raw: Any) -> V_co: ...


def _fail(raw: Any, diagnostic: Any, schema_name: str) -> ValidationError:
    logger.debug(
        "table.validation.failed",
        extra={"schema": schema_name, "diagnostic": diagnostic},
    )
    return ValidationError(raw, diagnostic)


class ModelValidator(Generic[V]):
    """Validator backed by a pydantic BaseModel subclass."""

    def __init__(self, model: type[V]) -> None:
        self.model = model
        self.field_names: frozenset[str] | None = frozenset(model.model_fields)  # type: ignore[attr-defined]

    def parse(self, raw: Any) -> V:
        try:
            return self.model.model_validate(raw)  # type: ignore[attr-defined]
        except pydantic.ValidationError as exc:
            raise _fail(raw, exc.errors(), self.model.__name__) from exc

    def __repr__(self) -> str:
        return f"ModelValidator({self.model.__name__})"


class AdapterValidator(Generic[V]):
    """Validator backed by a pydantic TypeAdapter."""

    def __init__(self, adapter: TypeAdapter[V], field_names: frozenset[str] | None = None) -> None:
        self.adapter = adapter
        self.field_names = field_names

    def parse(self, raw: Any) -> V:
        try:
            return self.adapter.validate_python(raw)
        except pydantic.ValidationError as exc:
            raise _fail(raw, exc.errors(), repr(self.adapter)) from exc

    def __repr__(self) -> str:
        return f"AdapterValidator({self.adapter!r})"


class CallableValidator(Generic[V]):
    """
    Validator backed by a ``parse`` method or a plain function.

    Notes:
        pydantic.ValidationError is a ValueError, so pydantic-backed callables get the
        structured ``errors()`` diagnostic while other ValueError/TypeError get ``str(exc)``.
    """

    def __init__(self, fn: Callable[[Any], V], name: str | None = None) -> None:
        self.fn = fn
        self.name = name or getattr(fn, "__qualname__", repr(fn))
        self.field_names: frozenset[str] | None = None

    def parse(self, raw: Any) -> V:
        try:
            return self.fn(raw)
        except pydantic.ValidationError as exc:
            raise _fail(raw, exc.errors(), self.name) from exc
        except ValidationError:
            raise
        except (ValueError, TypeError) as exc:
            raise _fail(raw, str(exc), self.name) from exc

    def __repr__(self) -> str:
        return f"CallableValidator({self.name})"


def _is_plain_callable(schema: Any) -> bool:
    return (
        inspect.isfunction(schema)
        or inspect.ismethod(schema)
        or inspect.isbuiltin(schema)
        or isinstance(schema, functools.partial)
    )


def resolve_validator(schema: Any) -> Validator[Any] | None:
    """
    Adapt a schema into a Validator.

    Args:
        schema (Any): None, a BaseModel subclass, a TypeAdapter, an object with
            ``parse``, a plain function, or a type/typing form understood by pydantic.

    Returns:
        Validator | None: The adapter, or None when ``schema`` is None.

    Raises:
        pydantic.PydanticSchemaGenerationError: If pydantic cannot build a schema for
            the given type.
    """
    if schema is None:
        return None
    if isinstance(schema, (ModelValidator, AdapterValidator, CallableValidator)):
        return schema
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return ModelValidator(schema)
    if isinstance(schema, TypeAdapter):
        return AdapterValidator(schema)
    if not isinstance(schema, type) and callable(getattr(schema, "parse", None)):
        return CallableValidator(schema.parse, name=type(schema).__qualname__)
    if _is_plain_callable(schema):
        return CallableValidator(schema)
    fields = frozenset(schema.__annotations__) if is_typeddict(schema) else None
    return AdapterValidator(TypeAdapter(schema), field_names=fields)
