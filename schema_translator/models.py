"""Canonical schema graph: raw catalog rows in, immutable tables and columns out."""

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .errors import InvalidRowError

PRIMARY_KEY = "P"
FOREIGN_KEY = "R"


def _as_int(value: Any) -> int:
    """Coerce a catalog numeric (None, Decimal, str) to int; missing means 0."""
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class RawMetadataRow:
    """One row of the catalog join. Several rows may describe the same column."""

    table: Optional[str]
    column: Optional[str]
    source_type: str = ""
    length: int = 0
    precision: int = 0
    scale: int = 0
    nullable: str = "Y"
    constraint_type: Optional[str] = None
    ref_table: Optional[str] = None
    column_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawMetadataRow":
        """Build a row from a catalog result mapping. Keys are matched case-insensitively."""
        lowered = {str(k).lower(): v for k, v in data.items()}
        column_id = lowered.get("column_id")
        return cls(
            table=_as_text(lowered.get("table_name")),
            column=_as_text(lowered.get("column_name")),
            source_type=_as_text(lowered.get("data_type")) or "",
            length=_as_int(lowered.get("data_length")),
            precision=_as_int(lowered.get("data_precision")),
            scale=_as_int(lowered.get("data_scale")),
            nullable=_as_text(lowered.get("nullable")) or "Y",
            constraint_type=_as_text(lowered.get("constraint_type")),
            ref_table=_as_text(lowered.get("r_table_name")),
            column_id=_as_int(column_id) if column_id is not None else None,
        )

    def validate(self) -> None:
        """Raise InvalidRowError when the row cannot be attributed to a column."""
        if not self.table:
            raise InvalidRowError(self, "missing table name")
        if not self.column:
            raise InvalidRowError(self, "missing column name")

    @property
    def is_nullable(self) -> bool:
        return (self.nullable or "Y").upper() != "N"


@dataclass(frozen=True)
class Column:
    name: str
    source_type: str
    length: int = 0
    precision: int = 0
    scale: int = 0
    nullable: bool = True
    is_primary_key: bool = False
    foreign_key_targets: Tuple[str, ...] = ()
    position: int = 0


@dataclass(frozen=True)
class Table:
    name: str
    columns: Tuple[Column, ...] = ()
    primary_key_columns: Tuple[Column, ...] = ()
    incoming_references: Tuple[str, ...] = ()

    @property
    def primary_key_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.primary_key_columns)

    @property
    def has_primary_key(self) -> bool:
        return bool(self.primary_key_columns)

    @property
    def foreign_key_targets(self) -> Tuple[str, ...]:
        """Distinct referenced tables across all columns, in column order."""
        seen: Dict[str, None] = {}
        for column in self.columns:
            for target in column.foreign_key_targets:
                seen.setdefault(target, None)
        return tuple(seen)

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(name)


class Schema(MappingABC):
    """Read-only ordered mapping of table name to Table."""

    def __init__(self, tables: Mapping[str, Table], rejected_rows: Tuple[InvalidRowError, ...] = ()):
        self._tables = MappingProxyType(dict(tables))
        self.rejected_rows = tuple(rejected_rows)

    def __getitem__(self, name: str) -> Table:
        return self._tables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"Schema(tables={list(self._tables)!r}, rejected_rows={len(self.rejected_rows)})"

    @property
    def tables(self) -> Tuple[Table, ...]:
        return tuple(self._tables.values())

    def table_names(self) -> Tuple[str, ...]:
        return tuple(self._tables)


@dataclass(frozen=True)
class MappedType:
    """Result of a type translation. `unmapped` is set when no rule matched."""

    name: str
    unmapped: bool = False

    def __str__(self) -> str:
        return self.name


