import pytest

from schema_translator.models import RawMetadataRow


def make_row(
    table,
    column,
    source_type="VARCHAR2",
    length=0,
    precision=0,
    scale=0,
    nullable="Y",
    constraint_type=None,
    ref_table=None,
    column_id=None,
):
    return RawMetadataRow(
        table=table,
        column=column,
        source_type=source_type,
        length=length,
        precision=precision,
        scale=scale,
        nullable=nullable,
        constraint_type=constraint_type,
        ref_table=ref_table,
        column_id=column_id,
    )


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def emp_dept_rows():
    """DEPT/EMP catalog rows as the fan-out join returns them (NOT NULL checks included)."""
    return [
        make_row("DEPT", "DEPT_ID", "NUMBER", 22, 5, 0, "N", "C", column_id=1),
        make_row("DEPT", "DEPT_ID", "NUMBER", 22, 5, 0, "N", "P", column_id=1),
        make_row("DEPT", "DNAME", "VARCHAR2", 30, 0, 0, "Y", column_id=2),
        make_row("EMP", "EMP_ID", "NUMBER", 22, 5, 0, "N", "C", column_id=1),
        make_row("EMP", "EMP_ID", "NUMBER", 22, 5, 0, "N", "P", column_id=1),
        make_row("EMP", "NAME", "VARCHAR2", 30, 0, 0, "Y", column_id=2),
        make_row("EMP", "DEPT_ID", "NUMBER", 22, 5, 0, "N", "C", column_id=3),
        make_row("EMP", "DEPT_ID", "NUMBER", 22, 5, 0, "N", "R", "DEPT", column_id=3),
    ]


@pytest.fixture
def emp_dept_schema(emp_dept_rows):
    from schema_translator.builder import build_schema

    return build_schema(emp_dept_rows)
