import pytest

from services.school_directory.export import build_dashboard_workbook, generate_export_code, parse_export_code
from services.school_directory.schemas.schools import SchoolRecord
from services.school_directory.seed_data import SEED_SCHOOLS


def seed_schools():
    return [SchoolRecord.model_validate(row) for row in SEED_SCHOOLS]


def test_export_code_reads_back_to_equal_records():
    schools = seed_schools()

    code = generate_export_code(schools)

    assert "SEED_SCHOOLS = [" in code
    assert parse_export_code(code) == schools


def test_export_of_empty_collection():
    assert parse_export_code(generate_export_code([])) == []


def test_parse_rejects_code_without_assignment():
    with pytest.raises(ValueError):
        parse_export_code("SCHOOLS = []\n")


def test_dashboard_workbook_has_counts_and_chart():
    wb = build_dashboard_workbook({"Tokyo": 2, "Kyoto": 1}, 3, 4, 5, "local")
    ws = wb["Dashboard"]

    assert ws["A1"].value == "City"
    assert ws["A2"].value == "Tokyo"
    assert ws["B2"].value == 2
    assert ws["B3"].value == 1
    assert ws["A5"].value == "Summary"
    assert ws["B6"].value == "local"
    assert ws["B7"].value == 3
    assert ws["B9"].value == 5
    assert len(ws._charts) == 1


def test_dashboard_workbook_without_schools_has_no_chart():
    wb = build_dashboard_workbook({}, 0, 0, 0, "remote")
    assert len(wb["Dashboard"]._charts) == 0
