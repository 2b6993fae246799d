import pytest

from survey_reports.modules.frequency_report import FrequencyReport, column_frequencies, top_answer

PREAMBLE = [["Encuesta de clima"]] + [[] for _ in range(7)]
HEADER = ["Folio", None, "Color favorito", "Edad"]
DATA = [
    [1, None, "Rojo", 30],
    [2, None, " Azul", 30],
    [3, None, "Rojo ", None],
]


def test_column_frequencies_trim_and_skip_blanks():
    counts = column_frequencies(DATA, 2)
    assert counts == {"Rojo": 2, "Azul": 1}
    assert column_frequencies(DATA, 3) == {"30": 2}


def test_top_answer_prefers_first_seen_on_ties():
    assert top_answer(column_frequencies(DATA, 0)) == ("1", 1)
    assert top_answer({}) == ("N/A", 0)


def test_analyze_summary_and_details():
    summary, details = FrequencyReport().analyze(PREAMBLE + [HEADER] + DATA)
    assert [s[0] for s in summary] == ["Folio", "Color favorito", "Edad"]
    assert summary[1] == ["Color favorito", 3, 2, "Rojo", 2]
    assert summary[2] == ["Edad", 2, 1, "30", 2]
    assert ["Color favorito", "Rojo", 2, "66.67%"] in details
    assert ["Edad", "30", 2, "100.00%"] in details


def test_short_sheet_rejected():
    with pytest.raises(ValueError, match="Not enough rows"):
        FrequencyReport().analyze(PREAMBLE)


def test_process_output(tmp_path, sheet_writer):
    path = sheet_writer(tmp_path / "Estadisticas_encuesta_1_Pierre.xlsx", PREAMBLE + [HEADER] + DATA)
    result = FrequencyReport().process(path, "Pierre")
    assert result["outputName"] == "analisis_encuesta_pierre.xlsx"
    assert list(result["sheets"]) == ["Resumen General", "Detalle Frecuencias"]
    assert result["sheets"]["Resumen General"]["data"][0][0] == "Pregunta/Código"
    assert len(result["sheets"]["Detalle Frecuencias"]["data"]) == 1 + 3 + 2 + 1


def test_custom_header_row(tmp_path, sheet_writer):
    path = sheet_writer(tmp_path / "corta.xlsx", [HEADER] + DATA)
    summary, _ = FrequencyReport(header_row=0).analyze(
        [["Folio", "Color"], [1, "Verde"]]
    )
    assert summary[1] == ["Color", 1, 1, "Verde", 1]
    assert FrequencyReport(header_row=0).process(path, "Corta")["sheets"]["Resumen General"]["data"][2][0] == "Color favorito"
