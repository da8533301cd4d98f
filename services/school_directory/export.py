# services/school_directory/export.py

import ast
import pprint
from typing import Dict, Iterable, List

import openpyxl
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Alignment, Font

from services.school_directory.schemas.schools import SchoolRecord

EXPORT_VARIABLE = "SEED_SCHOOLS"

EXPORT_HEADER = """\
# Generated from the live school directory.
# Replace the SEED_SCHOOLS block in services/school_directory/seed_data.py with this one.
"""


def generate_export_code(schools: Iterable[SchoolRecord]) -> str:
    rows = [school.model_dump(mode="json") for school in schools]
    body = pprint.pformat(rows, indent=4, width=100, sort_dicts=False)
    return f"{EXPORT_HEADER}\n{EXPORT_VARIABLE} = {body}\n"


def parse_export_code(source: str) -> List[SchoolRecord]:
    """Read the SEED_SCHOOLS literal back out of generated export code."""
    tree = ast.parse(source)
    for node in tree.body:
        if isinstance(node, ast.Assign) and any(
            isinstance(target, ast.Name) and target.id == EXPORT_VARIABLE for target in node.targets
        ):
            rows = ast.literal_eval(node.value)
            return [SchoolRecord.model_validate(row) for row in rows]
    raise ValueError(f"No {EXPORT_VARIABLE} assignment found in export code")


def build_dashboard_workbook(
    schools_per_city: Dict[str, int],
    total_schools: int,
    total_users: int,
    total_reviews: int,
    storage_mode: str,
):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Dashboard"

    ws.append(["City", "Schools"])
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")

    for city, count in schools_per_city.items():
        ws.append([city, count])

    # Summary below the per-city table
    summary_row_start = len(schools_per_city) + 3
    ws[f"A{summary_row_start}"] = "Summary"
    ws[f"A{summary_row_start}"].font = Font(bold=True)

    ws[f"A{summary_row_start + 1}"] = "Storage Mode"
    ws[f"B{summary_row_start + 1}"] = storage_mode

    ws[f"A{summary_row_start + 2}"] = "Total Schools"
    ws[f"B{summary_row_start + 2}"] = total_schools

    ws[f"A{summary_row_start + 3}"] = "Total Users"
    ws[f"B{summary_row_start + 3}"] = total_users

    ws[f"A{summary_row_start + 4}"] = "Total Reviews"
    ws[f"B{summary_row_start + 4}"] = total_reviews

    if schools_per_city:
        chart = BarChart()
        labels = Reference(ws, min_col=1, min_row=2, max_row=len(schools_per_city) + 1)
        data = Reference(ws, min_col=2, min_row=1, max_row=len(schools_per_city) + 1)
        chart.add_data(data, titles_from_data=True)
        chart.set_categories(labels)
        chart.title = "Schools per City"
        chart.y_axis.title = "Schools"
        ws.add_chart(chart, "D2")

    return wb
