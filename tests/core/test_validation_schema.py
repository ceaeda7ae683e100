import pytest
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing_extensions import TypedDict

from milkytables import ColumnError, Table, ValidationError
from milkytables.core.validation import (
    AdapterValidator,
    CallableValidator,
    ModelValidator,
    resolve_validator,
)


class Person(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    age: int = Field(..., ge=0)


class PersonDict(TypedDict):
    name: str
    age: int


COLUMNS = [{"key": "name", "label": "Name"}, {"key": "age", "label": "Age"}]


def test_create_parses_rows_through_model() -> None:
    t = Table.create(rows=[{"name": "Amy", "age": "19"}], columns=COLUMNS, schema=Person)
    value = t.rows[0].value
    assert isinstance(value, Person)
    assert value.age == 19
    assert t.get_rows()[0]["age"].value == 19


def test_create_fails_whole_construction() -> None:
    rows = [{"name": "Amy", "age": 19}, {"name": "Bad", "age": -1}]
    with pytest.raises(ValidationError) as ei:
        Table.create(rows=rows, columns=COLUMNS, schema=Person)
    assert ei.value.value == {"name": "Bad", "age": -1}
    assert ei.value.diagnostic[0]["loc"] == ("age",)


def test_add_rejects_and_leaves_table_unchanged() -> None:
    t = Table.create(rows=[{"name": "Amy", "age": 19}], columns=COLUMNS, schema=Person)
    with pytest.raises(ValidationError):
        t.add({"name": "Zed"})
    assert t.ids == (0,)


def test_add_stores_parsed_value_not_raw() -> None:
    raw = {"name": "Amy", "age": "19"}
    t = Table.create(columns=COLUMNS, schema=Person).add(raw)
    assert t.rows[0].value is not raw
    assert t.rows[0].value == Person(name="Amy", age=19)


def test_update_validates_even_for_missing_id() -> None:
    t = Table.create(rows=[{"name": "Amy", "age": 19}], columns=COLUMNS, schema=Person)
    with pytest.raises(ValidationError):
        t.update(99, {"name": "Amy", "age": "old"})
    assert t.update(0, {"name": "Amy", "age": "20"}).rows[0].value.age == 20


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Table.create(rows=[{"name": 1}], schema=Person)


def test_schema_carried_through_lineage() -> None:
    t = Table.create(columns=COLUMNS, schema=Person).add({"name": "A", "age": 1})
    t = t.sort_by_column("age", "desc").clear_all()
    assert t.schema is not None
    with pytest.raises(ValidationError):
        t.add({"name": "B", "age": -5})


def test_copy_of_model_row_is_independent() -> None:
    t = Table.create(rows=[{"name": "Amy", "age": 19}], columns=COLUMNS, schema=Person).copy(0)
    assert t.rows[1].value == t.rows[0].value
    assert t.rows[1].value is not t.rows[0].value


def test_unknown_column_key_rejected_for_model_schema() -> None:
    with pytest.raises(ColumnError, match="birthday"):
        Table.create(columns=[{"key": "birthday", "label": "Birthday"}], schema=Person)


def test_unknown_sort_key_rejected_for_model_schema() -> None:
    t = Table.create(rows=[{"name": "Amy", "age": 19}], columns=COLUMNS, schema=Person)
    with pytest.raises(ColumnError):
        t.sort_by_column("height", "asc")


def test_typed_dict_schema() -> None:
    v = resolve_validator(PersonDict)
    assert isinstance(v, AdapterValidator)
    assert v.field_names == frozenset({"name", "age"})
    t = Table.create(rows=[{"name": "Amy", "age": "19"}], columns=COLUMNS, schema=PersonDict)
    assert t.rows[0].value == {"name": "Amy", "age": 19}
    with pytest.raises(ValidationError):
        t.add({"name": "NoAge"})


def test_type_adapter_schema() -> None:
    adapter = TypeAdapter(dict[str, int])
    t = Table.create(rows=[{"a": "1"}], schema=adapter)
    assert t.rows[0].value == {"a": 1}
    assert resolve_validator(adapter).field_names is None


def test_parse_object_schema() -> None:
    class Schema:
        def parse(self, raw: dict) -> dict:
            if "name" not in raw:
                raise ValueError("name is required")
            return {**raw, "name": raw["name"].strip()}

    t = Table.create(rows=[{"name": "  Amy "}], schema=Schema())
    assert t.rows[0].value == {"name": "Amy"}
    with pytest.raises(ValidationError) as ei:
        t.add({})
    assert ei.value.diagnostic == "name is required"


def test_function_schema() -> None:
    def only_dicts(raw: object) -> dict:
        if not isinstance(raw, dict):
            raise TypeError("row must be a dict")
        return dict(raw)

    v = resolve_validator(only_dicts)
    assert isinstance(v, CallableValidator)
    with pytest.raises(ValidationError):
        Table.create(rows=[["not", "a", "dict"]], schema=only_dicts)


def test_unrelated_exceptions_propagate() -> None:
    def broken(raw: object) -> object:
        raise KeyError("boom")

    with pytest.raises(KeyError):
        Table.create(rows=[{}], schema=broken)


def test_resolve_validator_passthrough() -> None:
    v = resolve_validator(Person)
    assert isinstance(v, ModelValidator)
    assert resolve_validator(v) is v
    assert resolve_validator(None) is None
