import argparse

from survey_reports import analysis_utils as utils
from survey_reports import layouts
from survey_reports.etl.read_workbook import cell, read_sheet

KEY_COLUMNS = ("Departamento", "Propiedad", "Género")


def describe_columns(file_path, count=20, sheet_name=layouts.SHEET_DATA_NAME,
                     header_row=layouts.HEADER_ROW_INDEX):
    """(index, header, first data value) for the first `count` columns."""
    data = read_sheet(file_path, sheet_name)
    if len(data) <= header_row + 1:
        raise ValueError(f"Not enough rows to inspect in {file_path}")

    header = data[header_row]
    sample = data[header_row + 1]
    return [(i, cell(header, i), cell(sample, i)) for i in range(count)]


def find_key_columns(file_path, sheet_name=layouts.SHEET_DATA_NAME, header_row=layouts.HEADER_ROW_INDEX):
    """Index of the first header containing each key column name, -1 if missing."""
    header = read_sheet(file_path, sheet_name)[header_row]
    found = {}
    for key in KEY_COLUMNS:
        found[key] = next(
            (i for i, h in enumerate(header) if h is not None and key in str(h)),
            -1,
        )
    return found


def format_column_table(columns, width=30):
    def clip(v):
        return "UNDEFINED" if utils.is_blank(v) else str(v)[:width]

    output = [f"{'IDX':<3} | {'HEADER':<{width + 2}} | DATA sample"]
    output.append("-" * 4 + "|" + "-" * (width + 4) + "|" + "-" * 35)
    for idx, header, sample in columns:
        output.append(f"{idx:<3} | {clip(header):<{width + 2}} | {clip(sample)}")
    return "\n".join(output)


def analyze_file(file_path, count=20):
    print(f"\n--- Analyzing {file_path} ---")
    print(format_column_table(describe_columns(file_path, count)))

    print("\nKey columns:")
    for key, idx in find_key_columns(file_path).items():
        print(f"  {key}: {idx if idx != -1 else 'NOT FOUND'}")


def main():
    parser = argparse.ArgumentParser(description="Show header/data alignment of survey exports.")
    parser.add_argument("files", nargs="+", help="Survey export workbooks (.xlsx).")
    parser.add_argument("--columns", type=int, default=20, help="Number of columns to list.")
    args = parser.parse_args()

    for f in args.files:
        try:
            analyze_file(utils.data_path(f), args.columns)
        except (FileNotFoundError, KeyError, ValueError) as e:
            print(f"Error processing {f}: {e}")


if __name__ == "__main__":
    main()
