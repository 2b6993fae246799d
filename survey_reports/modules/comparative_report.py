"""
Previous round vs current round.

Inputs:
    comparativo_path - JSON map between baseline question wording and the current survey wording
    json_path        - baseline results export (Propiedad / Departamento / Pregunta / Resultado_Actual)
    excel_map        - property name -> analysis workbook generated by DepartmentReport/PropertyReport

Question text and department names drift between the two surveys, so both
sides are compared through clean_question() and case-insensitive department names.
"""

import os
import logging
from collections import OrderedDict
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field

from survey_reports.analysis_utils import clean_question, safe_sheet_name
from survey_reports.etl.load_baseline import load_baseline_rows, load_comparative_map
from survey_reports.etl.parse_reports import read_processed_report
from survey_reports.modules.json_report import NO_DEPARTMENT, NO_PROPERTY

OUTPUT_NAME = "Reporte_Comparativo.xlsx"
NOT_AVAILABLE = "N/A"
HEADERS = ["Pregunta Tabla Pequeña", "Resultado Pequeña", "Pregunta Tabla Grande", "Resultado Grande", "Diferencia"]
COLUMN_WIDTHS = [50, 10, 50, 10, 10]


class AnalysisWorkbook(BaseModel):
    path: str
    sheet: Optional[str] = Field(None, description="Department sheet; detected when omitted.")


def as_workbook(entry) -> AnalysisWorkbook:
    """Accepts a bare path, a {"path", "sheet"} mapping or an AnalysisWorkbook."""
    if isinstance(entry, str):
        return AnalysisWorkbook(path=entry)
    return AnalysisWorkbook.model_validate(entry)


class ComparativeConfig(BaseModel):
    comparativo_path: str
    json_path: str
    excel_map: Dict[str, Union[str, AnalysisWorkbook]] = Field(default_factory=dict)

    def workbooks(self):
        for prop, entry in self.excel_map.items():
            yield prop, as_workbook(entry)


def index_baseline(rows):
    """{property: {department: {clean question: score}}}"""
    index = {}
    for row in rows:
        q = clean_question(row.question)
        prop = row.property_name or NO_PROPERTY
        dept = row.department or NO_DEPARTMENT
        index.setdefault(prop, {}).setdefault(dept, {})[q] = row.result
    return index


def match_department(departments, name):
    target = str(name or "").lower().strip()
    for d in departments:
        if d.lower().strip() == target:
            return d
    return None


def score_difference(small, large):
    if isinstance(small, (int, float)) and isinstance(large, (int, float)):
        return round(small - large, 2)
    return NOT_AVAILABLE


class ComparativeReport:
    def __init__(self):
        self.mappings = []

    def find_mapping(self, clean_small):
        for m in self.mappings:
            if clean_question(m.small_question) == clean_small:
                return m
        return None

    def load_analysis(self, config):
        large_index = {}
        for prop, workbook in config.workbooks():
            logging.info(f"Loading analyzed report for {prop}: {workbook.path}")
            if os.path.exists(workbook.path):
                large_index[prop] = read_processed_report(workbook.path, workbook.sheet)
            else:
                logging.warning(f"File not found: {workbook.path}")
        return large_index

    def compare_department(self, dept, questions, large_depts):
        target = match_department(large_depts, dept) if large_depts else None
        rows = []
        for q_small, score_small in questions.items():
            mapping = self.find_mapping(q_small)
            if mapping is None:
                continue

            score_large = NOT_AVAILABLE
            if target is not None:
                found = large_depts[target].get(clean_question(mapping.large_question))
                if found is not None:
                    score_large = found

            diff = score_difference(score_small, score_large)
            rows.append([
                mapping.small_question,
                score_small,
                mapping.large_question,
                score_large,
                diff,
            ])
        return rows

    def process(self, config: ComparativeConfig):
        logging.info("Starting comparative analysis (from processed reports)...")
        if not os.path.exists(config.comparativo_path):
            raise FileNotFoundError(f"Comparativo file not found: {config.comparativo_path}")
        self.mappings = load_comparative_map(config.comparativo_path)

        small_index = index_baseline(load_baseline_rows(config.json_path))
        large_index = self.load_analysis(config)

        sheets = OrderedDict()
        for prop, depts in small_index.items():
            sheet_rows = []
            for dept, questions in depts.items():
                dept_rows = self.compare_department(dept, questions, large_index.get(prop))
                if dept_rows:
                    sheet_rows.append([f"DEPARTAMENTO: {dept}", "", "", "", ""])
                    sheet_rows.append(list(HEADERS))
                    sheet_rows.extend(dept_rows)
                    sheet_rows.append([""] * 5)
                    sheet_rows.append([""] * 5)

            if sheet_rows:
                sheets[safe_sheet_name(prop)] = {"data": sheet_rows, "widths": COLUMN_WIDTHS}

        return {"outputName": OUTPUT_NAME, "sheets": sheets}
