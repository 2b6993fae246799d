import sys

from survey_reports.etl import analyze_structure


def test_describe_columns(generic_survey):
    columns = analyze_structure.describe_columns(generic_survey, count=16)
    assert len(columns) == 16
    assert columns[4] == (4, "Género", "Femenino")
    assert columns[8] == (8, "Departamento", "Cocina")
    assert columns[14] == (14, "14. El espacio donde trabajo es seguro", "Siempre")
    assert columns[15][1:] == ("15. Me siento presionado por mi jefe", "Nunca")


def test_find_key_columns(generic_survey, property_survey):
    assert analyze_structure.find_key_columns(generic_survey) == {"Departamento": 8, "Propiedad": -1, "Género": 4}
    assert analyze_structure.find_key_columns(property_survey)["Propiedad"] == 8


def test_format_column_table_marks_blanks():
    table = analyze_structure.format_column_table([(0, "Folio", 1), (1, None, "  ")], width=10)
    lines = table.splitlines()
    assert lines[0].startswith("IDX")
    assert "Folio" in lines[2]
    assert lines[3].count("UNDEFINED") == 2


def test_cli_reports_errors_and_continues(generic_survey, tmp_path, monkeypatch, capsys):
    missing = str(tmp_path / "falta.xlsx")
    monkeypatch.setattr(sys, "argv", ["survey-inspect", missing, generic_survey, "--columns", "5"])
    analyze_structure.main()

    out = capsys.readouterr().out
    assert f"Error processing {missing}" in out
    assert f"--- Analyzing {generic_survey} ---" in out
    assert "Género: 4" in out
    assert "Propiedad: NOT FOUND" in out
