from collections import Counter

from survey_reports.analysis_utils import is_blank
from survey_reports.etl.read_workbook import cell

DEMO_HEADER = ["Opción", "Cantidad", "Porcentaje"]
BLANK_ROW = ["", "", ""]
SEPARATOR = "-------------------------"


def count_demographics(rows, column_map):
    """
    Counts answers per demographic label.
    Returns {label: (total, Counter)} with options in first-seen order.
    """
    counts = {label: Counter() for label in column_map}

    for row in rows:
        for label, col in column_map.items():
            val = cell(row, col)
            if is_blank(val):
                continue
            counts[label][str(val).strip()] += 1

    return {label: (sum(c.values()), c) for label, c in counts.items()}


def format_percent(count, total) -> str:
    if total <= 0:
        return "0%"
    return f"{count / total * 100:.2f}%"


def analyze_demographics(rows, column_map):
    """Frequency tables (option, count, %) for every demographic column, ready for a sheet."""
    result_rows = []
    for label, (total, counts) in count_demographics(rows, column_map).items():
        result_rows.append([label.upper(), "", ""])
        result_rows.append(list(DEMO_HEADER))
        for option, count in counts.items():
            result_rows.append([option, count, format_percent(count, total)])
        result_rows.append(list(BLANK_ROW))
    return result_rows


def analyze_demographics_by_group(groups, column_map, label="DEPARTAMENTO"):
    result_rows = []
    for name, group_rows in groups.items():
        result_rows.append([f"{label}: {name.upper()}", "", ""])
        result_rows.extend(analyze_demographics(group_rows, column_map))
        result_rows.append(list(BLANK_ROW))
        result_rows.append([SEPARATOR, "", ""])
        result_rows.append(list(BLANK_ROW))
    return result_rows
