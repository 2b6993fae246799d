from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from survey_reports.analysis_utils import is_blank
from survey_reports.etl.normalize_responses import (
    DISTRIBUTION_KEYS,
    NEGATIVE_KEYS,
    POSITIVE_KEYS,
    get_score,
    normalize_response,
    question_polarity,
    row_has_content,
)
from survey_reports.etl.read_workbook import cell

MAX_SCORE = 4


class QuestionStat(BaseModel):
    question: str
    average: float = Field(..., description="Mean points (0-4) over valid answers.")
    score100: float = Field(..., description="Question grade on a 0-100 scale.")
    total: int = Field(..., description="Number of valid Likert answers.")
    distribution: Dict[str, int]

    def as_row(self) -> list:
        return [self.question, self.average, self.score100, self.total] + [
            self.distribution[k] for k in DISTRIBUTION_KEYS
        ]


def compute_score100(distribution, points, valid, total_surveys, polarity=None) -> float:
    """
    '+' questions: share of all surveys answering Siempre / Casi siempre.
    '-' questions: share of all surveys answering Nunca / Casi nunca.
    Unmarked questions: average points over valid answers, scaled to 100.
    """
    if polarity == "+":
        return sum(distribution[k] for k in POSITIVE_KEYS) / total_surveys * 100
    if polarity == "-":
        return sum(distribution[k] for k in NEGATIVE_KEYS) / total_surveys * 100
    if valid == 0:
        return 0.0
    return (points / valid) / MAX_SCORE * 100


def analyze_questions(rows, headers, start_index: int, question_types: Optional[list] = None) -> List[QuestionStat]:
    """Per-question statistics for every header column from `start_index` onwards."""
    stats = []
    # Ghost rows at the bottom of an export must not inflate the denominator
    total_surveys = sum(1 for r in rows if row_has_content(r))
    if total_surveys == 0:
        return stats

    for col in range(start_index, len(headers or [])):
        question_text = headers[col]
        if is_blank(question_text):
            continue

        points = 0
        valid = 0
        distribution = {k: 0 for k in DISTRIBUTION_KEYS}

        for row in rows:
            val = cell(row, col)
            score = get_score(val)
            if score is None:
                continue
            points += score
            valid += 1
            distribution[normalize_response(val)] += 1

        polarity = question_polarity(question_types, col)
        score100 = compute_score100(distribution, points, valid, total_surveys, polarity)
        average = points / valid if valid else 0.0

        stats.append(QuestionStat(
            question=str(question_text).strip(),
            average=round(average, 2),
            score100=round(score100, 2),
            total=valid,
            distribution=distribution,
        ))

    return stats


def average_score(stats: List[QuestionStat]) -> float:
    if not stats:
        return 0.0
    return sum(s.score100 for s in stats) / len(stats)
