import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from survey_reports.analysis_utils import parse_percent, safe_sheet_name

# Styled report formatting
dept_title_font = Font(size=14, bold=True)
bold_font = Font(bold=True)
summary_title_font = Font(size=16, bold=True, color='FF000000')
summary_header_font = Font(bold=True, color='FFFFFFFF')
final_font = Font(bold=True, size=12)

header_fill = PatternFill(start_color='FFE0E0E0', end_color='FFE0E0E0', fill_type='solid')
average_fill = PatternFill(start_color='FFFFF2CC', end_color='FFFFF2CC', fill_type='solid')
summary_header_fill = PatternFill(start_color='FF4472C4', end_color='FF4472C4', fill_type='solid')
final_fill = PatternFill(start_color='FFC6E0B4', end_color='FFC6E0B4', fill_type='solid')

QUESTION_WIDTH = 80
SCORE_WIDTH = 20


def _cell_value(value):
    if isinstance(value, str) and value == "":
        return None
    return value


def set_column_widths(ws, widths):
    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width


def write_workbook(sheets, output_path):
    """
    Writes plain array-of-arrays sheets.
    `sheets` is an ordered mapping: {sheet name: {"data": [[...]], "widths": [..]}}.
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for name, content in sheets.items():
        ws = wb.create_sheet(safe_sheet_name(name))
        for row in content.get("data") or []:
            ws.append([_cell_value(v) for v in row])
        widths = content.get("widths") or []
        if widths:
            set_column_widths(ws, widths)

    if not wb.worksheets:
        logging.warning(f"No sheets to write for {output_path}; saving an empty workbook")
        wb.create_sheet("Sheet1")
    wb.save(output_path)
    logging.info(f"Saved: {output_path}")
    return output_path


def _style_row(ws, row_idx, font=None, fill=None, columns=2):
    for col in range(1, columns + 1):
        c = ws.cell(row=row_idx, column=col)
        if font is not None:
            c.font = font
        if fill is not None:
            c.fill = fill


def _write_department(ws, current_row, dept):
    """Writes one department block and returns (next free row, department average)."""
    ws.cell(row=current_row, column=1, value=dept["name"]).font = dept_title_font
    current_row += 1

    ws.cell(row=current_row, column=1, value="Pregunta")
    ws.cell(row=current_row, column=2, value="Resultado Anterior")
    _style_row(ws, current_row, font=bold_font, fill=header_fill)
    current_row += 1

    sum_scores = 0.0
    count_scores = 0
    for item in dept["stats"]:
        ws.cell(row=current_row, column=1, value=item["q"])
        numeric = parse_percent(item.get("score100"))
        val = 0.0
        if numeric is not None:
            val = numeric
            sum_scores += numeric
            count_scores += 1
        ws.cell(row=current_row, column=2, value=round(val, 2))
        current_row += 1

    dept_avg = sum_scores / count_scores if count_scores else 0.0
    ws.cell(row=current_row, column=1, value="Calificación Promedio")
    ws.cell(row=current_row, column=2, value=round(dept_avg, 2))
    _style_row(ws, current_row, font=bold_font, fill=average_fill)

    return current_row + 2, dept_avg


def _write_property_summary(ws, current_row, dept_scores):
    current_row += 1
    ws.cell(row=current_row, column=1, value="Resumen General Propiedad").font = summary_title_font
    current_row += 1

    ws.cell(row=current_row, column=1, value="Departamento")
    ws.cell(row=current_row, column=2, value="Calificación")
    _style_row(ws, current_row, font=summary_header_font, fill=summary_header_fill)
    current_row += 1

    for name, avg in dept_scores:
        ws.cell(row=current_row, column=1, value=name)
        ws.cell(row=current_row, column=2, value=round(avg, 2))
        current_row += 1

    final_avg = sum(avg for _, avg in dept_scores) / len(dept_scores)
    ws.cell(row=current_row, column=1, value="Calificación Final Propiedad")
    ws.cell(row=current_row, column=2, value=round(final_avg, 2))
    _style_row(ws, current_row, font=final_font, fill=final_fill)
    return final_avg


def write_styled_report(report, output_path):
    """
    One worksheet per property, one block per department plus a property summary.

    report = {"properties": [{"name": ..., "departments": [{"name": ..., "stats": [{"q": ..., "score100": ...}]}],
                              "extra_sheets": [{"name": ..., "data": [[...]]}]}]}
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for prop in report["properties"]:
        ws = wb.create_sheet(safe_sheet_name(prop["name"]))
        ws.column_dimensions['A'].width = QUESTION_WIDTH
        ws.column_dimensions['B'].width = SCORE_WIDTH

        current_row = 1
        dept_scores = []
        for dept in prop["departments"]:
            current_row, dept_avg = _write_department(ws, current_row, dept)
            dept_scores.append((dept["name"], dept_avg))

        if dept_scores:
            _write_property_summary(ws, current_row, dept_scores)

        for extra in prop.get("extra_sheets") or []:
            extra_ws = wb.create_sheet(safe_sheet_name(extra["name"]))
            for r in extra.get("data") or []:
                extra_ws.append([_cell_value(v) for v in r])

    if not wb.worksheets:
        logging.warning(f"No sheets to write for {output_path}; saving an empty workbook")
        wb.create_sheet("Sheet1")
    wb.save(output_path)
    logging.info(f"Saved: {output_path}")
    return output_path
