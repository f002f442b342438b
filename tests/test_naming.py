import pytest

from schema_translator.naming import pluralize, title_case, unique_member


@pytest.mark.parametrize(
    "identifier,expected",
    [
        ("EMP", "Emp"),
        ("EMP_ID", "EmpId"),
        ("order line", "OrderLine"),
        ("__WEIRD__NAME_", "WeirdName"),
        ("x", "X"),
        ("EMP$HIST", "EmpHist"),
        ("ORDER#", "Order"),
        ("_", "_"),
        ("", "_"),
        ("2FA_CODE", "_2faCode"),
    ],
)
def test_title_case(identifier, expected):
    assert title_case(identifier) == expected


def test_title_case_is_pure():
    assert title_case("DEPT_NO") == title_case("dept_no") == "DeptNo"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Emp", "Emps"),
        ("Category", "Categories"),
        ("Day", "Days"),
        ("Address", "Addresses"),
        ("Box", "Boxes"),
        ("Batch", "Batches"),
    ],
)
def test_pluralize(name, expected):
    assert pluralize(name) == expected


def test_unique_member():
    assert unique_member("Dept", set()) == "Dept"
    assert unique_member("Dept", {"Dept"}) == "Dept2"
    assert unique_member("Dept", {"Dept", "Dept2"}) == "Dept3"
