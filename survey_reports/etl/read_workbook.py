import os
import logging
from typing import Any, List

from openpyxl import load_workbook


def _trim_row(values) -> List[Any]:
    """Drops trailing empty cells so a blank row comes back as []."""
    row = list(values)
    while row and (row[-1] is None or (isinstance(row[-1], str) and row[-1] == "")):
        row.pop()
    return row


def sheet_names(file_path: str) -> List[str]:
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    wb = load_workbook(file_path, read_only=True)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def read_sheet(file_path: str, sheet_name: str) -> List[List[Any]]:
    """
    Reads one sheet as a list of rows (array-of-arrays), cached values only.
    Raises FileNotFoundError / KeyError so callers can abort that item.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    wb = load_workbook(file_path, read_only=True, data_only=True)
    try:
        if sheet_name not in wb.sheetnames:
            raise KeyError(
                f"Sheet '{sheet_name}' not found in {file_path}. "
                f"Available sheets: {', '.join(wb.sheetnames)}"
            )
        ws = wb[sheet_name]
        rows = [_trim_row(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    logging.debug(f"Read {len(rows)} rows from {file_path} [{sheet_name}]")
    return rows


def cell(row, index: int):
    """Safe positional access; short rows just return None."""
    if row is None or index is None or index < 0 or index >= len(row):
        return None
    return row[index]
