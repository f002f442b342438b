"""PostgreSQL CREATE TABLE script emitter."""

from typing import List, Optional

from ..models import Column, Schema, Table
from ..type_mapper import TypeMapper
from .base import ArtifactEmitter


class DdlEmitter(ArtifactEmitter):
    """
    Emit one CREATE TABLE per table, in schema order, followed by an
    ALTER TABLE ... ADD PRIMARY KEY when the table has key columns.

    Tables are not sorted by foreign-key dependency.
    """

    name = "ddl"

    def __init__(self, type_mapper: Optional[TypeMapper] = None, source_schema: Optional[str] = None):
        super().__init__(type_mapper)
        self.source_schema = source_schema

    def column_definition(self, column: Column) -> str:
        sql_type = self.type_mapper.sql_type_for(column).name
        not_null = " NOT NULL" if not column.nullable else ""
        return f"{column.name.lower()} {sql_type}{not_null}"

    def create_table(self, table: Table) -> str:
        col_def = ",\n".join(f"    {self.column_definition(c)}" for c in table.columns)
        return f"CREATE TABLE {table.name.lower()} (\n{col_def}\n);"

    def add_primary_key(self, table: Table) -> Optional[str]:
        if not table.has_primary_key:
            return None
        keys = ", ".join(c.name.lower() for c in table.primary_key_columns)
        return f"ALTER TABLE {table.name.lower()} ADD PRIMARY KEY ({keys});"

    def emit(self, schema: Schema) -> str:
        parts: List[str] = []
        if self.source_schema:
            parts.append(f"-- PostgreSQL DDL generated from Oracle schema {self.source_schema}")
            parts.append("")
        for table in schema.tables:
            parts.append(self.create_table(table))
            pk = self.add_primary_key(table)
            if pk:
                parts.append(pk)
            parts.append("")
        return "\n".join(parts)
