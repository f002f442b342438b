from unittest.mock import MagicMock

from schema_translator.catalog import (
    OracleCatalogReader,
    get_reader,
    get_reader_for_engine,
    supported_dialects,
)
from schema_translator.catalog.oracle import CATALOG_QUERY


def _result_row(**values):
    row = MagicMock()
    row._mapping = values
    return row


def _engine(rows):
    engine = MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    conn.execute.return_value = iter(rows)
    return engine, conn


def test_fetch_rows_binds_uppercased_schema():
    engine, conn = _engine([])
    OracleCatalogReader().fetch_rows(engine, "  hr ")

    args, _ = conn.execute.call_args
    assert args[1] == {"schema": "HR"}
    assert "ALL_TAB_COLUMNS" in str(args[0])


def test_fetch_rows_converts_result_rows():
    engine, _ = _engine(
        [
            _result_row(
                TABLE_NAME="EMP",
                COLUMN_NAME="EMP_ID",
                DATA_TYPE="NUMBER",
                DATA_LENGTH=22,
                DATA_PRECISION=5,
                DATA_SCALE=0,
                NULLABLE="N",
                CONSTRAINT_TYPE="P",
                R_TABLE_NAME=None,
                COLUMN_ID=1,
            ),
            _result_row(
                TABLE_NAME="EMP",
                COLUMN_NAME="NOTE",
                DATA_TYPE="CLOB",
                DATA_LENGTH=4000,
                DATA_PRECISION=None,
                DATA_SCALE=None,
                NULLABLE="Y",
                CONSTRAINT_TYPE=None,
                R_TABLE_NAME=None,
                COLUMN_ID=2,
            ),
        ]
    )
    rows = OracleCatalogReader().fetch_rows(engine, "hr")

    assert [(r.table, r.column) for r in rows] == [("EMP", "EMP_ID"), ("EMP", "NOTE")]
    assert rows[0].precision == 5
    assert rows[0].constraint_type == "P"
    assert rows[1].precision == 0
    assert rows[1].is_nullable


def test_catalog_query_filters_every_owner_and_recycle_bin():
    assert CATALOG_QUERY.count(":schema") == 4
    assert "NOT LIKE 'BIN$%'" in CATALOG_QUERY
    assert "R_TABLE_NAME" in CATALOG_QUERY


def test_reader_registry():
    assert supported_dialects() == ("oracle",)
    assert isinstance(get_reader("oracle"), OracleCatalogReader)
    assert get_reader("mssql") is None


def test_reader_for_engine_uses_dialect_name():
    engine = MagicMock()
    engine.dialect.name = "oracle"
    assert isinstance(get_reader_for_engine(engine), OracleCatalogReader)
    engine.dialect.name = "sqlite"
    assert get_reader_for_engine(engine) is None
