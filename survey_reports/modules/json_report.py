import json
import logging
from collections import OrderedDict

from survey_reports.etl.load_baseline import load_baseline_rows

OUTPUT_NAME = "Reporte_Encuestas_Numerico.xlsx"
NESTED_JSON_NAME = "reporte_final.json"
NO_PROPERTY = "Sin Propiedad"
NO_DEPARTMENT = "Sin Departamento"


def group_baseline(rows):
    """{property: {department: [BaselineRow, ...]}} in first-seen order."""
    grouped = OrderedDict()
    for row in rows:
        prop = row.property_name or NO_PROPERTY
        dept = row.department or NO_DEPARTMENT
        grouped.setdefault(prop, OrderedDict()).setdefault(dept, []).append(row)
    return grouped


def _format_result(value):
    if value is None:
        return "N/A"
    if isinstance(value, str):
        return value if "%" in value else f"{value}%"
    return f"{value:g}%"


def build_nested_summary(grouped):
    """Plain JSON view of the grouping: property -> departamentos -> resultados."""
    summary = OrderedDict()
    for prop, depts in grouped.items():
        summary[prop] = {
            "departamentos": [
                {
                    "nombre": dept,
                    "resultados": [
                        {"pregunta": r.question, "resultado_actual": _format_result(r.result)}
                        for r in rows
                    ],
                }
                for dept, rows in depts.items()
            ]
        }
    return summary


class JsonReport:
    def process(self, file_path):
        rows = load_baseline_rows(file_path)
        logging.info(f"Processing {len(rows)} records...")
        grouped = group_baseline(rows)

        properties = []
        for prop, depts in grouped.items():
            properties.append({
                "name": prop,
                "departments": [
                    {
                        "name": dept,
                        "stats": [
                            {"q": r.question, "score100": r.result if r.result is not None else 0}
                            for r in dept_rows
                        ],
                    }
                    for dept, dept_rows in depts.items()
                ],
            })

        return {
            "outputName": OUTPUT_NAME,
            "properties": properties,
            "nested": build_nested_summary(grouped),
        }


def save_nested_json(nested, output_file):
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(nested, f, indent=4, ensure_ascii=False)
    logging.info(f"JSON summary saved to {output_file}")
