import pytest

from survey_reports.etl.read_workbook import cell, read_sheet, sheet_names


def test_rows_are_trimmed_and_gaps_kept(tmp_path, sheet_writer):
    path = sheet_writer(tmp_path / "datos.xlsx", [["a", None, "c", None, None], [], [None, 2]])
    assert read_sheet(path, "Worksheet") == [["a", None, "c"], [], [None, 2]]


def test_sheet_names(tmp_path, sheet_writer):
    path = sheet_writer(tmp_path / "datos.xlsx", [["a"]], sheet_name="Hoja")
    assert sheet_names(path) == ["Hoja"]


def test_missing_sheet_lists_available(tmp_path, sheet_writer):
    path = sheet_writer(tmp_path / "datos.xlsx", [["a"]], sheet_name="Hoja")
    with pytest.raises(KeyError, match="Available sheets: Hoja"):
        read_sheet(path, "Worksheet")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="File not found"):
        read_sheet(str(tmp_path / "nada.xlsx"), "Worksheet")
    with pytest.raises(FileNotFoundError):
        sheet_names(str(tmp_path / "nada.xlsx"))


def test_cell_is_safe():
    assert cell(["a", "b"], 1) == "b"
    assert cell(["a"], 3) is None
    assert cell(["a"], -1) is None
    assert cell(None, 0) is None
    assert cell(["a"], None) is None
