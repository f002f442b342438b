import logging
import random
from dataclasses import FrozenInstanceError

import pytest

from schema_translator.builder import SchemaGraphBuilder, build_schema
from schema_translator.errors import InvalidRowError
from schema_translator.models import RawMetadataRow


def test_duplicate_rows_collapse_with_union_of_flags(row):
    rows = [
        row("EMP", "EMP_ID", "NUMBER", precision=5, nullable="N", constraint_type="P", column_id=1),
        row("EMP", "EMP_ID", "NUMBER", precision=5, nullable="N", constraint_type="R", ref_table="PERSON", column_id=1),
        row("EMP", "EMP_ID", "NUMBER", precision=5, nullable="N", constraint_type="C", column_id=1),
    ]
    table = build_schema(rows)["EMP"]

    assert [c.name for c in table.columns] == ["EMP_ID"]
    column = table.columns[0]
    assert column.is_primary_key
    assert column.foreign_key_targets == ("PERSON",)
    assert column.nullable is False


def test_fold_is_idempotent(emp_dept_rows):
    once = build_schema(emp_dept_rows)
    twice = build_schema(emp_dept_rows + emp_dept_rows)
    assert once.tables == twice.tables


def test_primary_key_order_independent_of_arrival(row):
    rows = [
        row("ORDER_LINE", "ORDER_ID", "NUMBER", precision=9, nullable="N", constraint_type="P", column_id=1),
        row("ORDER_LINE", "LINE_NO", "NUMBER", precision=4, nullable="N", constraint_type="P", column_id=2),
        row("ORDER_LINE", "QTY", "NUMBER", precision=10, scale=2, column_id=3),
    ]
    expected = build_schema(rows)["ORDER_LINE"]
    assert expected.primary_key_names == ("ORDER_ID", "LINE_NO")

    shuffled = list(rows)
    for seed in range(5):
        random.Random(seed).shuffle(shuffled)
        assert build_schema(shuffled)["ORDER_LINE"] == expected


def test_columns_without_column_id_keep_first_seen_order(row):
    rows = [row("T", "B"), row("T", "A"), row("T", "B", constraint_type="P")]
    table = build_schema(rows)["T"]
    assert [c.name for c in table.columns] == ["B", "A"]
    assert table.primary_key_names == ("B",)


def test_multiple_foreign_key_targets_are_kept_and_deduplicated(row):
    rows = [
        row("LINK", "OWNER_ID", "NUMBER", precision=9, constraint_type="R", ref_table="USERS", column_id=1),
        row("LINK", "OWNER_ID", "NUMBER", precision=9, constraint_type="R", ref_table="GROUPS", column_id=1),
        row("LINK", "OWNER_ID", "NUMBER", precision=9, constraint_type="R", ref_table="USERS", column_id=1),
        row("USERS", "ID", "NUMBER", precision=9, constraint_type="P", column_id=1),
        row("GROUPS", "ID", "NUMBER", precision=9, constraint_type="P", column_id=1),
    ]
    schema = build_schema(rows)

    assert schema["LINK"].column("OWNER_ID").foreign_key_targets == ("GROUPS", "USERS")
    assert schema["USERS"].incoming_references == ("LINK",)
    assert schema["GROUPS"].incoming_references == ("LINK",)
    assert schema["LINK"].incoming_references == ()


def test_foreign_key_without_referenced_table_is_ignored(row):
    table = build_schema([row("T", "C", constraint_type="R", ref_table=None)])["T"]
    assert table.columns[0].foreign_key_targets == ()


def test_self_reference_is_preserved(row):
    rows = [
        row("EMP", "EMP_ID", "NUMBER", precision=5, constraint_type="P", column_id=1),
        row("EMP", "MGR_ID", "NUMBER", precision=5, constraint_type="R", ref_table="EMP", column_id=2),
    ]
    table = build_schema(rows)["EMP"]
    assert table.column("MGR_ID").foreign_key_targets == ("EMP",)
    assert table.column("EMP_ID").foreign_key_targets == ()
    assert table.incoming_references == ("EMP",)


def test_unknown_constraint_codes_are_plain_columns(row):
    table = build_schema([row("T", "C", constraint_type="U"), row("T", "C", constraint_type="X")])["T"]
    assert not table.columns[0].is_primary_key
    assert table.columns[0].foreign_key_targets == ()


def test_table_without_primary_key_is_valid(row):
    table = build_schema([row("LOG", "MSG", "CLOB")])["LOG"]
    assert table.primary_key_columns == ()
    assert not table.has_primary_key


def test_invalid_rows_are_skipped_and_collected(row):
    rows = [row(None, "C"), row("T", ""), row("T", "OK")]
    schema = build_schema(rows)

    assert list(schema) == ["T"]
    assert [c.name for c in schema["T"].columns] == ["OK"]
    assert len(schema.rejected_rows) == 2
    assert all(isinstance(e, InvalidRowError) for e in schema.rejected_rows)
    assert schema.rejected_rows[0].reason == "missing table name"
    assert schema.rejected_rows[1].reason == "missing column name"


def test_strict_mode_raises_on_invalid_row(row):
    with pytest.raises(InvalidRowError):
        SchemaGraphBuilder(strict=True).build([row("T", "A"), row("T", None)])


def test_tables_keep_first_appearance_order(emp_dept_schema):
    assert emp_dept_schema.table_names() == ("DEPT", "EMP")


def test_schema_is_immutable(emp_dept_schema):
    with pytest.raises(TypeError):
        emp_dept_schema._tables["NEW"] = None
    with pytest.raises(FrozenInstanceError):
        emp_dept_schema["EMP"].name = "X"
    with pytest.raises(FrozenInstanceError):
        emp_dept_schema["EMP"].columns[0].is_primary_key = False


def test_row_from_catalog_mapping():
    raw = RawMetadataRow.from_mapping({
        "TABLE_NAME": "EMP",
        "COLUMN_NAME": "SAL",
        "DATA_TYPE": "NUMBER",
        "DATA_LENGTH": 22,
        "DATA_PRECISION": None,
        "DATA_SCALE": None,
        "NULLABLE": "Y",
        "CONSTRAINT_TYPE": None,
        "R_TABLE_NAME": None,
        "COLUMN_ID": 4,
    })
    assert raw.table == "EMP"
    assert raw.precision == 0 and raw.scale == 0 and raw.length == 22
    assert raw.column_id == 4
    assert raw.is_nullable


def test_row_from_lowercase_mapping():
    raw = RawMetadataRow.from_mapping({"table_name": "t", "column_name": "c", "nullable": "N"})
    assert (raw.table, raw.column) == ("t", "c")
    assert raw.is_nullable is False
    assert raw.column_id is None


def test_skipped_row_is_logged_with_surviving_identifier(row, caplog):
    with caplog.at_level(logging.WARNING, logger="schema_translator.builder"):
        build_schema([row("EMP", None), row(None, "NAME")])
    assert "EMP.?: missing column name" in caplog.text
    assert "?.NAME: missing table name" in caplog.text
