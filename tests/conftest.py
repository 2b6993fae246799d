import json

import openpyxl
import pytest

from survey_reports import layouts

QUESTIONS = [
    ("+", "14. El espacio donde trabajo es seguro"),
    ("-", "15. Me siento presionado por mi jefe"),
    ("", "16. Recibo reconocimiento por mi trabajo"),
]

# gender, age, civil, school, department, position type, tenure, answers
RESPONDENTS = [
    ("Femenino", "25-30", "Soltero", "Licenciatura", "Cocina", "Operativo", "1 año",
     ["Siempre", "Nunca", "Casi siempre"]),
    ("Masculino", "31-40", "Casado", "Preparatoria", "Cocina", "Operativo", "2 años",
     ["casi siempre ", "Algunas veces", "Nuca"]),
    ("Femenino", "25-30", "Casado", "Licenciatura", "Ama de llaves", "Supervisor", "1 año",
     ["Algunas veces", "Casi nunca", None]),
]


def build_rows(layout, respondents, questions=QUESTIONS, properties=None, footer=True):
    width = layout.questions_start + len(questions)
    polarity = [None] * width
    headers = [None] * width
    headers[0] = "Folio"
    headers[layout.gender] = "Género"
    headers[layout.age] = "Edad"
    headers[layout.civil] = "Estado civil"
    headers[layout.school] = "Nivel de estudios"
    headers[layout.department] = "Departamento"
    headers[layout.position_type] = "Tipo de puesto"
    headers[layout.tenure] = "Tiempo en el puesto actual"
    if layout.property_col is not None:
        headers[layout.property_col] = "Propiedad"
    for i, (marker, text) in enumerate(questions):
        polarity[layout.questions_start + i] = marker or None
        headers[layout.questions_start + i] = text

    rows = [["Resultados de la encuesta"]]
    rows += [[] for _ in range(layouts.QUESTION_TYPE_ROW_INDEX - 1)]
    rows.append(polarity)
    rows.append(headers)

    for n, resp in enumerate(respondents):
        gender, age, civil, school, dept, ptype, tenure, answers = resp
        row = [None] * width
        row[0] = n + 1
        row[layout.gender] = gender
        row[layout.age] = age
        row[layout.civil] = civil
        row[layout.school] = school
        row[layout.department] = dept
        row[layout.position_type] = ptype
        row[layout.tenure] = tenure
        if properties is not None:
            row[layout.property_col] = properties[n]
        for i, answer in enumerate(answers):
            row[layout.questions_start + i] = answer
        rows.append(row)

    if footer:
        rows.append(["Total de encuestas", None, len(respondents)])
    return rows


def write_sheet(path, rows, sheet_name=layouts.SHEET_DATA_NAME):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_name
    for row in rows:
        ws.append(row)
    wb.save(path)
    return str(path)


@pytest.fixture
def generic_survey(tmp_path):
    rows = build_rows(layouts.GENERIC, RESPONDENTS)
    return write_sheet(tmp_path / "estadisticas_encuesta_2_Palacio.xlsx", rows)


@pytest.fixture
def property_survey(tmp_path):
    rows = build_rows(
        layouts.PROPERTY,
        RESPONDENTS,
        properties=["Princess Mundo Imperial", "Princess Mundo Imperial", "Palacio Mundo Imperial"],
    )
    return write_sheet(tmp_path / "estadisticas_encuesta_3_Princess.xlsx", rows)


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sheet_writer():
    return write_sheet
