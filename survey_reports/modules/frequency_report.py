import logging
from collections import Counter, OrderedDict

from survey_reports import layouts
from survey_reports.analysis_utils import is_blank
from survey_reports.etl.read_workbook import cell, read_sheet

# Frequency exports carry their headers on row 9
DEFAULT_HEADER_ROW = 8

SUMMARY_COLUMNS = ["Pregunta/Código", "Total Respuestas", "Valores Únicos", "Respuesta Más Común", "Frecuencia Top"]
DETAIL_COLUMNS = ["Pregunta", "Respuesta", "Cantidad", "Porcentaje"]


def column_frequencies(rows, col):
    counts = Counter()
    for row in rows:
        val = cell(row, col)
        if is_blank(val):
            continue
        counts[str(val).strip()] += 1
    return counts


def top_answer(counts):
    """Most frequent answer; ties go to the one seen first."""
    top, top_count = "N/A", 0
    for answer, count in counts.items():
        if count > top_count:
            top, top_count = answer, count
    return top, top_count


class FrequencyReport:
    """Column-by-column frequency summary of a raw survey export, no scoring."""

    def __init__(self, header_row=DEFAULT_HEADER_ROW, sheet_name=layouts.SHEET_DATA_NAME):
        self.header_row = header_row
        self.sheet_name = sheet_name

    def analyze(self, data):
        if len(data) <= self.header_row:
            raise ValueError("Not enough rows for header.")

        headers = data[self.header_row]
        rows = data[self.header_row + 1:]
        logging.info(f"Found {len(headers)} columns in header row, {len(rows)} data rows.")

        summary = []
        details = []
        for col, header in enumerate(headers):
            if is_blank(header):
                continue
            counts = column_frequencies(rows, col)
            total = sum(counts.values())
            top, top_count = top_answer(counts)

            summary.append([header, total, len(counts), top, top_count])
            for answer, count in counts.items():
                details.append([header, answer, count, f"{count / total * 100:.2f}%"])

        logging.info(f"Analyzed {len(summary)} columns.")
        return summary, details

    def process(self, file_path, name):
        summary, details = self.analyze(read_sheet(file_path, self.sheet_name))

        sheets = OrderedDict()
        sheets["Resumen General"] = {"data": [list(SUMMARY_COLUMNS)] + summary, "widths": [50, 15, 15, 30, 15]}
        sheets["Detalle Frecuencias"] = {"data": [list(DETAIL_COLUMNS)] + details, "widths": [50, 30, 10, 12]}
        return {
            "outputName": f"analisis_encuesta_{name.lower()}.xlsx",
            "sheets": sheets,
        }
