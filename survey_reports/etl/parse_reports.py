import logging

from survey_reports.analysis_utils import clean_question, parse_percent
from survey_reports.etl.read_workbook import cell, read_sheet, sheet_names
from survey_reports.modules.department_report import FIXED_SHEETS

DEPT_PREFIX = "DEPARTAMENTO:"
SKIP_LABELS = ("Pregunta", "PROMEDIO GENERAL")
QUESTION_COL = 0
SCORE_COL = 2


def parse_department_blocks(data):
    """
    Parses the department sheet of a generated analysis workbook.

    Expected layout, repeated per department:
        DEPARTAMENTO: NAME
        Pregunta | Nivel Promedio | Calificación (0-100) | ...
        <question> | <avg> | <score> | ...
        PROMEDIO GENERAL | | xx.xx%

    Returns {department: {clean question: score}}.
    """
    result = {}
    current_dept = None

    for row in data:
        if not row:
            continue
        first_cell = str(cell(row, 0) or "").strip()

        if first_cell.startswith(DEPT_PREFIX):
            current_dept = first_cell[len(DEPT_PREFIX):].strip()
            result[current_dept] = {}
            continue

        if first_cell in SKIP_LABELS or current_dept is None:
            continue

        question = cell(row, QUESTION_COL)
        score = cell(row, SCORE_COL)
        if question and score is not None:
            parsed = parse_percent(score)
            result[current_dept][clean_question(question)] = parsed if parsed is not None else score

    return result


def find_department_sheet(file_path):
    """First sheet that isn't one of the fixed report sheets and has DEPARTAMENTO blocks."""
    for name in sheet_names(file_path):
        if name in FIXED_SHEETS:
            continue
        data = read_sheet(file_path, name)
        if any(str(cell(r, 0) or "").strip().startswith(DEPT_PREFIX) for r in data):
            return name
    return None


def read_processed_report(file_path, sheet_name=None):
    """
    Loads a previously generated analysis workbook as {department: {clean question: score}}.
    Read problems are logged and give back an empty index so the comparison can go on.
    """
    try:
        sheet_name = sheet_name or find_department_sheet(file_path)
        if not sheet_name:
            logging.warning(f"No department sheet found in {file_path}")
            return {}

        data = read_sheet(file_path, sheet_name)
        if not data:
            logging.warning(f"Sheet {sheet_name} empty in {file_path}")
            return {}
        return parse_department_blocks(data)

    except Exception as e:
        logging.error(f"Error reading existing report {file_path}: {e}")
        return {}
