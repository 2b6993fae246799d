from collections import OrderedDict

from survey_reports.modules.analyze_demographics import (
    analyze_demographics,
    analyze_demographics_by_group,
    count_demographics,
    format_percent,
)

COLUMNS = {"Género": 0, "Edad": 1}


def test_counts_skip_blanks_and_trim():
    rows = [["F ", 30], ["M", None], ["F", "  "], [None, 30]]
    counts = count_demographics(rows, COLUMNS)
    total, genders = counts["Género"]
    assert total == 3
    assert genders == {"F": 2, "M": 1}
    assert counts["Edad"][0] == 2
    assert counts["Edad"][1] == {"30": 2}


def test_table_layout():
    rows = [["F", 30], ["M", 41], ["F", 30]]
    table = analyze_demographics(rows, COLUMNS)
    assert table[0] == ["GÉNERO", "", ""]
    assert table[1] == ["Opción", "Cantidad", "Porcentaje"]
    assert table[2] == ["F", 2, "66.67%"]
    assert table[3] == ["M", 1, "33.33%"]
    assert table[4] == ["", "", ""]
    assert table[5] == ["EDAD", "", ""]


def test_format_percent_handles_zero_total():
    assert format_percent(0, 0) == "0%"
    assert format_percent(1, 8) == "12.50%"


def test_grouped_blocks_have_separator():
    groups = OrderedDict([("Cocina", [["F", 30]]), ("Bar", [["M", 22]])])
    table = analyze_demographics_by_group(groups, {"Género": 0})
    assert table[0] == ["DEPARTAMENTO: COCINA", "", ""]
    assert ["-------------------------", "", ""] in table
    titles = [r[0] for r in table if str(r[0]).startswith("DEPARTAMENTO:")]
    assert titles == ["DEPARTAMENTO: COCINA", "DEPARTAMENTO: BAR"]
