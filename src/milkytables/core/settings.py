"""
Configuration for milkytables tables.

Defines TableSettings, a frozen dataclass carrying the policies that the table
applies where behavior is a matter of choice rather than contract: duplicate
column keys, placement of missing sort values, and column key checks against the
schema's declared fields.

Precedence
- TableSettings.load(): environment > TOML > defaults.
- TOML search when no path is given: ./milkytables.toml (top-level keys or a
  [table] section), then ./pyproject.toml under [tool.milkytables].

Notes
- Nothing is loaded implicitly: Table.create uses TableSettings() unless given an
  instance, and a table's settings flow unchanged to every descendant.
- Unknown or invalid values from env/TOML are ignored and the previous value is kept;
  invalid values passed to the constructor raise GrammarError.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import GrammarError
from .grammar import (
    DuplicateKeyPolicy,
    NonePosition,
    duplicate_key_policy_from_value,
    none_position_from_value,
)

__all__ = ["TableSettings", "ENV_PREFIX"]

logger = logging.getLogger(__name__)

ENV_PREFIX = "MILKYTABLES_"


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class TableSettings:
    """
    Runtime policies for Table.

    Attributes:
        duplicate_column_keys (DuplicateKeyPolicy): FORBID raises ColumnError when two
            columns share a key; LAST_WRITE_WINS keeps them and lets the later column
            win in projections.
        none_position (NonePosition): Where sort_by_column puts rows whose value at the
            sort key is None, NaN or missing, for either direction.
        check_column_keys (bool): When the schema declares its field names, reject
            column keys (at create) and sort keys that are not fields.

    Raises:
        GrammarError: If a policy is given as an unknown string.

    Examples:
        >>> TableSettings(none_position=NonePosition.FIRST).none_position.value
        'first'
    """

    duplicate_column_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.FORBID
    none_position: NonePosition = NonePosition.LAST
    check_column_keys: bool = True

    def __post_init__(self) -> None:
        # Policy fields also accept their string tokens.
        object.__setattr__(
            self,
            "duplicate_column_keys",
            duplicate_key_policy_from_value(self.duplicate_column_keys),
        )
        object.__setattr__(self, "none_position", none_position_from_value(self.none_position))

    @classmethod
    def _apply_mapping(cls, base: TableSettings, cfg: dict[str, Any] | None) -> TableSettings:
        """Apply a loose config mapping onto TableSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "duplicate_column_keys" in cfg:
            try:
                s = replace(
                    s,
                    duplicate_column_keys=duplicate_key_policy_from_value(
                        cfg["duplicate_column_keys"]
                    ),
                )
            except GrammarError:
                logger.debug(
                    "settings.ignored",
                    extra={"setting": "duplicate_column_keys", "raw": cfg["duplicate_column_keys"]},
                )

        if "none_position" in cfg:
            try:
                s = replace(s, none_position=none_position_from_value(cfg["none_position"]))
            except GrammarError:
                logger.debug(
                    "settings.ignored",
                    extra={"setting": "none_position", "raw": cfg["none_position"]},
                )

        if "check_column_keys" in cfg:
            s = replace(s, check_column_keys=_bool(cfg["check_column_keys"]))

        return s

    @classmethod
    def from_env(
        cls, base: TableSettings | None = None, prefix: str = ENV_PREFIX
    ) -> TableSettings:
        """
        Build TableSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - MILKYTABLES_DUPLICATE_COLUMN_KEYS ("forbid" | "last_write_wins")
            - MILKYTABLES_NONE_POSITION ("first" | "last")
            - MILKYTABLES_CHECK_COLUMN_KEYS (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name in ("duplicate_column_keys", "none_position", "check_column_keys"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> TableSettings:
        """
        Build TableSettings from a TOML file.

        Search order when `path` is None:
            1) ./milkytables.toml (with either a [table] section or top-level keys)
            2) ./pyproject.toml under [tool.milkytables]

        Returns defaults if no file is present or none of them holds settings.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                logger.debug("settings.toml.unreadable", extra={"path": str(p)})
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "milkytables.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("milkytables") if isinstance(tool, dict) else None
            elif isinstance(data.get("table"), dict):
                cfg = data["table"]
            else:
                cfg = data
            if cfg:
                logger.debug("settings.toml.loaded", extra={"path": str(p)})
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> TableSettings:
        """
        Load TableSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (milkytables.toml, pyproject.toml).

        Returns:
            TableSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        logger.debug(
            "settings.load",
            extra={
                "duplicate_column_keys": s.duplicate_column_keys.value,
                "none_position": s.none_position.value,
                "check_column_keys": s.check_column_keys,
            },
        )
        return s
