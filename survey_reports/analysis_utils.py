import os
import re
import logging
import unicodedata
from typing import Any

from dotenv import load_dotenv

# Load Env
load_dotenv()
DATA_DIR = os.getenv("SURVEY_DATA_DIR", ".")
OUTPUT_DIR = os.getenv("SURVEY_OUTPUT_DIR", "analisis")
BASELINE_JSON = os.getenv("SURVEY_BASELINE_JSON", "P.json")
COMPARATIVO_JSON = os.getenv("SURVEY_COMPARATIVO_JSON", "Comparativo.json")
LOG_LEVEL = os.getenv("SURVEY_LOG_LEVEL", "INFO")

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

SHEET_NAME_MAX = 30
INVALID_SHEET_CHARS = re.compile(r"[:\\/?*\[\]]")


def setup_logging(level=None):
    """Configures the root logger once for CLI entry points."""
    level = level or LOG_LEVEL
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def data_path(filename: str) -> str:
    """Resolves an input file against SURVEY_DATA_DIR unless it is already absolute."""
    if os.path.isabs(filename):
        return filename
    return os.path.join(DATA_DIR, filename)


def output_path(filename: str, output_dir=None) -> str:
    """Returns a path inside the output directory, creating the directory if needed."""
    target_dir = output_dir or OUTPUT_DIR
    if not os.path.exists(target_dir):
        os.makedirs(target_dir)
    return os.path.join(target_dir, filename)


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def clean_text(value: Any, default: str) -> str:
    """Trimmed string form of a cell, or `default` when the cell is blank."""
    if is_blank(value):
        return default
    return str(value).strip()


def safe_sheet_name(name: str) -> str:
    """Excel caps sheet names at 31 chars and rejects a handful of characters."""
    return INVALID_SHEET_CHARS.sub("", str(name)[:SHEET_NAME_MAX])


def safe_file_stem(name: str) -> str:
    return re.sub(r"\s+", "_", safe_sheet_name(name)).lower()


def parse_percent(value: Any):
    """
    Turns 90, '90', '90%' or ' 90.5 % ' into a float.
    Returns None for blanks and anything that is not a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).replace("%", "").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def clean_question(text: Any) -> str:
    """
    Normalizes question text so the same question matches across exports:
    drops a '12.' / '3-' / '4)' prefix, lowercases, strips accents,
    collapses whitespace and removes one trailing '.', ':' or ';'.
    """
    if not text:
        return ""
    s = str(text)
    s = re.sub(r"^\d+[.\-)]\s*", "", s)
    s = s.lower()
    s = unicodedata.normalize("NFD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"\s+", " ", s).strip()
    s = re.sub(r"[.:;]$", "", s)
    return s
