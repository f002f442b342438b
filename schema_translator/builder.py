"""Fold denormalized catalog rows into a canonical, de-duplicated Schema."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .errors import InvalidRowError
from .models import FOREIGN_KEY, PRIMARY_KEY, Column, RawMetadataRow, Schema, Table

logger = logging.getLogger(__name__)


@dataclass
class _ColumnAccumulator:
    """Working state for one (table, column) pair while folding rows."""

    first: RawMetadataRow
    arrival: int
    is_primary_key: bool = False
    foreign_key_targets: Dict[str, None] = field(default_factory=dict)

    def merge(self, row: RawMetadataRow) -> None:
        code = (row.constraint_type or "").upper()
        if code == PRIMARY_KEY:
            self.is_primary_key = True
        elif code == FOREIGN_KEY and row.ref_table:
            self.foreign_key_targets.setdefault(row.ref_table, None)

    def sort_key(self) -> tuple:
        # Catalog column id wins; rows without one keep arrival order after those with one.
        if self.first.column_id is None:
            return (1, self.arrival)
        return (0, self.first.column_id, self.arrival)

    def freeze(self, position: int) -> Column:
        row = self.first
        return Column(
            name=row.column,
            source_type=row.source_type,
            length=row.length,
            precision=row.precision,
            scale=row.scale,
            nullable=row.is_nullable,
            is_primary_key=self.is_primary_key,
            foreign_key_targets=tuple(sorted(self.foreign_key_targets)),
            position=position,
        )


class SchemaGraphBuilder:
    """
    Build a Schema from raw catalog rows.

    Rows for the same (table, column) collapse into one Column: the first row
    supplies type and nullability, every row contributes its PK flag and FK
    target. Rows without a table or column name are rejected; by default they
    are collected on `Schema.rejected_rows`, with strict=True the first one raises.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def build(self, rows: Iterable[RawMetadataRow]) -> Schema:
        tables: Dict[str, Dict[str, _ColumnAccumulator]] = {}
        rejected: List[InvalidRowError] = []

        for arrival, row in enumerate(rows):
            try:
                row.validate()
            except InvalidRowError as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping catalog row {row.table or '?'}.{row.column or '?'}: {e.reason}")
                rejected.append(e)
                continue

            columns = tables.setdefault(row.table, {})
            acc = columns.get(row.column)
            if acc is None:
                acc = columns[row.column] = _ColumnAccumulator(first=row, arrival=arrival)
            acc.merge(row)

        frozen_columns: Dict[str, Tuple[Column, ...]] = {}
        for table_name, columns in tables.items():
            ordered = sorted(columns.values(), key=lambda a: a.sort_key())
            frozen_columns[table_name] = tuple(acc.freeze(i) for i, acc in enumerate(ordered))

        incoming = _incoming_references(frozen_columns)
        schema = Schema(
            {
                name: Table(
                    name=name,
                    columns=cols,
                    primary_key_columns=tuple(c for c in cols if c.is_primary_key),
                    incoming_references=incoming.get(name, ()),
                )
                for name, cols in frozen_columns.items()
            },
            rejected_rows=tuple(rejected),
        )
        logger.debug(f"Built schema with {len(schema)} tables, {len(rejected)} rejected rows")
        return schema


def _incoming_references(columns_by_table: Dict[str, Tuple[Column, ...]]) -> Dict[str, Tuple[str, ...]]:
    """Map each referenced table to the tables pointing at it, in schema order."""
    incoming: Dict[str, Dict[str, None]] = {}
    for table_name, columns in columns_by_table.items():
        for column in columns:
            for target in column.foreign_key_targets:
                incoming.setdefault(target, {}).setdefault(table_name, None)
    return {target: tuple(sources) for target, sources in incoming.items()}


def build_schema(rows: Iterable[RawMetadataRow], strict: bool = False) -> Schema:
    return SchemaGraphBuilder(strict=strict).build(rows)
