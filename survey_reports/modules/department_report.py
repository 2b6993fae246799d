"""
Department breakdown for a single-property survey export (Palacio, Pierre).

Output workbook:
    Analisis General     - question stats over every respondent
    <sheet name>         - the same table repeated per department
    Demografía General   - demographic frequencies over every respondent
    Demografía Dept      - demographic frequencies per department
"""

import logging
from collections import OrderedDict

from survey_reports import layouts
from survey_reports.analysis_utils import clean_text, is_blank, safe_sheet_name
from survey_reports.etl.read_workbook import cell, read_sheet
from survey_reports.modules.analyze_demographics import analyze_demographics, analyze_demographics_by_group
from survey_reports.modules.score_questions import analyze_questions, average_score

NO_DEPARTMENT = "Sin Departamento"
GENERAL_TITLE = "ANALISIS GENERAL (TODOS LOS DEPARTAMENTOS)"

MAIN_HEADER = [
    "Pregunta", "Nivel Promedio", "Calificación (0-100)", "Total Respuestas",
    "Siempre", "Casi siempre", "Algunas veces", "Casi nunca", "Nunca",
]
MAIN_WIDTHS = [50, 15, 20, 15, 10, 10, 10, 10, 10]
DEMO_WIDTHS = [30, 10, 15]

GENERAL_SHEET = "Analisis General"
DEMO_GENERAL_SHEET = "Demografía General"
DEMO_DEPT_SHEET = "Demografía Dept"
FIXED_SHEETS = (GENERAL_SHEET, DEMO_GENERAL_SHEET, DEMO_DEPT_SHEET)


def group_rows(rows, col, default):
    """Buckets rows by the trimmed value in `col`, keeping first-seen order."""
    groups = OrderedDict()
    for row in rows:
        key = clean_text(cell(row, col), default)
        groups.setdefault(key, []).append(row)
    return groups


class DepartmentReport:
    def __init__(self, layout=layouts.GENERIC):
        self.layout = layout
        self.demo_map = layouts.demographic_columns(layout)

    def load(self, file_path):
        """Returns (headers, question type markers, respondent rows)."""
        data = read_sheet(file_path, layouts.SHEET_DATA_NAME)
        if len(data) <= layouts.HEADER_ROW_INDEX:
            raise ValueError(
                f"{file_path} has {len(data)} rows; expected headers on row {layouts.HEADER_ROW_INDEX + 1}"
            )
        headers = data[layouts.HEADER_ROW_INDEX]
        question_types = data[layouts.QUESTION_TYPE_ROW_INDEX]
        rows = [r for r in data[layouts.DATA_START_INDEX:] if self.is_response_row(r)]
        logging.info(f"Loaded {len(rows)} responses from {file_path}")
        return headers, question_types, rows

    def is_response_row(self, row):
        # Summary/footer rows at the bottom lack both key columns
        if not row:
            return False
        return not (is_blank(cell(row, self.layout.gender)) and is_blank(cell(row, self.group_column())))

    def group_column(self):
        return self.layout.department

    def process(self, file_path, sheet_name):
        headers, question_types, rows = self.load(file_path)
        return {
            "outputName": f"analisis_{sheet_name.lower()}.xlsx",
            "sheets": self.build_sheets(rows, sheet_name, headers, question_types),
        }

    def build_sheets(self, rows, sheet_name, headers, question_types):
        start = self.layout.questions_start
        departments = group_rows(rows, self.layout.department, NO_DEPARTMENT)

        general_stats = analyze_questions(rows, headers, start, question_types)
        general_rows = self.format_stats_output(GENERAL_TITLE, general_stats)

        main_rows = []
        for dept, dept_rows in departments.items():
            stats = analyze_questions(dept_rows, headers, start, question_types)
            if stats:
                main_rows.append([""] * len(MAIN_HEADER))
                main_rows.extend(self.format_stats_output(f"DEPARTAMENTO: {dept.upper()}", stats))

        sheets = OrderedDict()
        sheets[GENERAL_SHEET] = {"data": general_rows, "widths": MAIN_WIDTHS}
        sheets[safe_sheet_name(sheet_name)] = {"data": main_rows, "widths": MAIN_WIDTHS}
        sheets[DEMO_GENERAL_SHEET] = {"data": analyze_demographics(rows, self.demo_map), "widths": DEMO_WIDTHS}
        sheets[DEMO_DEPT_SHEET] = {"data": analyze_demographics_by_group(departments, self.demo_map), "widths": DEMO_WIDTHS}
        return sheets

    def format_stats_output(self, title, stats):
        rows = [[title] + [""] * (len(MAIN_HEADER) - 1), list(MAIN_HEADER)]
        rows.extend(stat.as_row() for stat in stats)

        padding = [""] * (len(MAIN_HEADER) - 3)
        rows.append([""] * len(MAIN_HEADER))
        rows.append(["PROMEDIO GENERAL", "", f"{average_score(stats):.2f}%"] + padding)
        return rows
