import os
import json
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from survey_reports.analysis_utils import parse_percent


class BaselineRow(BaseModel):
    """One question result from the previous survey round (database export)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    property_name: Optional[str] = Field(None, alias="Propiedad")
    department: Optional[str] = Field(None, alias="Departamento")
    question: Optional[str] = Field(None, alias="Pregunta")
    result: Optional[Union[float, str]] = Field(
        None,
        alias="Resultado_Actual",
        description="0-100 with '%' stripped; non-numeric text such as 'N/A' is kept as is.",
    )

    @field_validator("property_name", "department", "question", mode="before")
    @classmethod
    def _as_text(cls, v):
        if v is None:
            return None
        return str(v)

    @field_validator("result", mode="before")
    @classmethod
    def _parse_result(cls, v):
        if v is None or isinstance(v, bool):
            return None
        parsed = parse_percent(v)
        if parsed is not None:
            return parsed
        text = str(v).strip()
        return text or None


class QuestionMapping(BaseModel):
    small_question: str = Field(..., alias="pregunta_tabla_pequena", description="Question text in the baseline export.")
    large_question: str = Field(..., alias="pregunta_tabla_grande", description="Question text in the current survey.")


class ComparativeMap(BaseModel):
    mappings: List[QuestionMapping] = Field(default_factory=list, alias="comparativo_completo")


def read_json(file_path: str) -> Any:
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    with open(file_path, 'r', encoding='utf-8') as f:
        raw = f.read()
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}") from e


def extract_rows(export: Any) -> List[dict]:
    """
    Finds the result rows in any of the shapes the export comes in:
      - a bare list of rows
      - a phpMyAdmin export list (header, database, {"type": "table", "data": [...]})
      - an object with a "data" list
    """
    if isinstance(export, list):
        if export and isinstance(export[0], dict) and export[0].get("Propiedad"):
            return export
        for item in export:
            if isinstance(item, dict) and item.get("type") == "table" and item.get("data"):
                return item["data"]
        return []
    if isinstance(export, dict) and isinstance(export.get("data"), list):
        return export["data"]
    return []


def load_baseline_rows(file_path: str) -> List[BaselineRow]:
    logging.info(f"Reading JSON from {file_path}...")
    rows = extract_rows(read_json(file_path))
    if not rows:
        logging.warning(f"No rows found in {file_path}")
    return [BaselineRow.model_validate(r) for r in rows]


def load_comparative_map(file_path: str) -> List[QuestionMapping]:
    comp = ComparativeMap.model_validate(read_json(file_path))
    logging.info(f"Loaded {len(comp.mappings)} question mappings from {file_path}")
    return comp.mappings
