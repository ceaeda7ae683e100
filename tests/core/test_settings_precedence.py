from __future__ import annotations

from pathlib import Path

import pytest

from milkytables import DuplicateKeyPolicy, NonePosition, TableSettings

_ENV_KEYS = [
    "MILKYTABLES_DUPLICATE_COLUMN_KEYS",
    "MILKYTABLES_NONE_POSITION",
    "MILKYTABLES_CHECK_COLUMN_KEYS",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_defaults_when_no_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    s = TableSettings.load()
    assert s == TableSettings()
    assert s.duplicate_column_keys is DuplicateKeyPolicy.FORBID
    assert s.none_position is NonePosition.LAST
    assert s.check_column_keys is True


def test_toml_table_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(
        tmp_path,
        "milkytables.toml",
        """
        [table]
        duplicate_column_keys = "last_write_wins"
        none_position = "first"
        check_column_keys = false
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    s = TableSettings.load()
    assert s.duplicate_column_keys is DuplicateKeyPolicy.LAST_WRITE_WINS
    assert s.none_position is NonePosition.FIRST
    assert s.check_column_keys is False


def test_toml_top_level_keys(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "milkytables.toml", 'none_position = "FIRST"\n')
    monkeypatch.chdir(tmp_path)
    assert TableSettings.load().none_position is NonePosition.FIRST


def test_pyproject_tool_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.milkytables]
        duplicate_column_keys = "last_write_wins"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    assert TableSettings.load().duplicate_column_keys is DuplicateKeyPolicy.LAST_WRITE_WINS


def test_env_over_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "milkytables.toml", 'none_position = "first"\ncheck_column_keys = false\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MILKYTABLES_NONE_POSITION", "last")
    monkeypatch.setenv("MILKYTABLES_CHECK_COLUMN_KEYS", "yes")
    s = TableSettings.load()
    assert s.none_position is NonePosition.LAST
    assert s.check_column_keys is True


def test_explicit_path(tmp_path: Path) -> None:
    p = _write(tmp_path, "custom.toml", 'duplicate_column_keys = "last_write_wins"\n')
    s = TableSettings.from_toml(p)
    assert s.duplicate_column_keys is DuplicateKeyPolicy.LAST_WRITE_WINS


def test_invalid_values_are_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "milkytables.toml", 'none_position = "middle"\nduplicate_column_keys = 3\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MILKYTABLES_DUPLICATE_COLUMN_KEYS", "sometimes")
    assert TableSettings.load() == TableSettings()


def test_unreadable_toml_falls_back(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path, "milkytables.toml", "this is = = not toml")
    monkeypatch.chdir(tmp_path)
    assert TableSettings.load() == TableSettings()


def test_check_column_keys_off_allows_unknown_keys() -> None:
    from pydantic import BaseModel

    from milkytables import Table

    class Person(BaseModel):
        name: str

    t = Table.create(
        rows=[{"name": "Amy"}],
        columns=[{"key": "nickname", "label": "Nick"}],
        schema=Person,
        settings=TableSettings(check_column_keys=False),
    )
    assert t.get_rows()[0]["nickname"].value is None


def test_policies_accept_strings() -> None:
    s = TableSettings(duplicate_column_keys="LAST_WRITE_WINS", none_position=" first ")  # type: ignore[arg-type]
    assert s.duplicate_column_keys is DuplicateKeyPolicy.LAST_WRITE_WINS
    assert s.none_position is NonePosition.FIRST
    assert s == TableSettings(
        duplicate_column_keys=DuplicateKeyPolicy.LAST_WRITE_WINS,
        none_position=NonePosition.FIRST,
    )


def test_string_forbid_policy_rejects_duplicate_columns() -> None:
    from milkytables import ColumnError, Table

    with pytest.raises(ColumnError):
        Table.create(
            columns=[{"key": "a", "label": "A"}, {"key": "a", "label": "A2"}],
            settings=TableSettings(duplicate_column_keys="forbid"),  # type: ignore[arg-type]
        )


def test_string_none_position_applies_to_sort() -> None:
    from milkytables import Table

    t = Table.create(
        rows=[{"k": 2}, {"k": None}, {"k": 1}],
        settings=TableSettings(none_position="first"),  # type: ignore[arg-type]
    )
    assert t.sort_by_column("k", "asc").ids == (1, 2, 0)


@pytest.mark.parametrize(
    "kwargs",
    [{"duplicate_column_keys": "sometimes"}, {"none_position": "middle"}, {"none_position": 3}],
)
def test_invalid_constructor_policies_raise(kwargs: dict) -> None:
    from milkytables import GrammarError

    with pytest.raises(GrammarError):
        TableSettings(**kwargs)
