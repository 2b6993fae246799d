"""
Multi-property survey export (Princess): one analysis workbook per property,
each broken down by department like DepartmentReport.
"""

import logging

from survey_reports import layouts
from survey_reports.analysis_utils import safe_file_stem, safe_sheet_name
from survey_reports.modules.department_report import DepartmentReport, group_rows

UNKNOWN_PROPERTY = "Desconocida"


class PropertyReport(DepartmentReport):
    def __init__(self, layout=layouts.PROPERTY, prefix="princess"):
        if layout.property_col is None:
            raise ValueError(f"Layout {layout.name} has no property column")
        super().__init__(layout)
        self.prefix = prefix

    def group_column(self):
        return self.layout.property_col

    def process(self, file_path, sheet_name=None):
        headers, question_types, rows = self.load(file_path)
        properties = group_rows(rows, self.layout.property_col, UNKNOWN_PROPERTY)

        results = []
        for prop_name, prop_rows in properties.items():
            logging.info(f"Processing property group: {prop_name} ({len(prop_rows)} responses)")
            results.append({
                "outputName": f"analisis_{self.prefix}_{safe_file_stem(prop_name)}.xlsx",
                "sheets": self.build_sheets(prop_rows, safe_sheet_name(prop_name), headers, question_types),
            })
        return results
