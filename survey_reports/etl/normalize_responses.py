from survey_reports.analysis_utils import is_blank

# Likert answer -> points
SCORE_MAP = {
    "SIEMPRE": 4,
    "CASI SIEMPRE": 3,
    "ALGUNAS VECES": 2,
    "CASI NUNCA": 1,
    "NUNCA": 0,
    "NUCA": 0,  # typo in some exports
}

DISTRIBUTION_KEYS = ["Siempre", "Casi siempre", "Algunas veces", "Casi nunca", "Nunca"]

CANONICAL = {
    "SIEMPRE": "Siempre",
    "CASI SIEMPRE": "Casi siempre",
    "ALGUNAS VECES": "Algunas veces",
    "CASI NUNCA": "Casi nunca",
    "NUNCA": "Nunca",
    "NUCA": "Nunca",
}

POSITIVE_KEYS = ("Siempre", "Casi siempre")
NEGATIVE_KEYS = ("Nunca", "Casi nunca")


def _token(value):
    if not isinstance(value, str):
        return None
    return value.strip().upper()


def get_score(value):
    """'Casi siempre ' -> 3. Numbers, blanks and free text -> None."""
    token = _token(value)
    if token is None:
        return None
    return SCORE_MAP.get(token)


def normalize_response(value):
    """Maps a raw answer onto one of DISTRIBUTION_KEYS, or None if it isn't a Likert answer."""
    token = _token(value)
    if token is None:
        return None
    return CANONICAL.get(token)


def row_has_content(row) -> bool:
    return bool(row) and any(not is_blank(v) for v in row)


def question_polarity(question_types, col):
    """Returns '+', '-' or None for the marker above a question header."""
    if not question_types or col >= len(question_types):
        return None
    marker = question_types[col]
    if is_blank(marker):
        return None
    marker = str(marker).strip()
    return marker if marker in ("+", "-") else None
