"""
Column offsets for each survey export variant.

Every export comes out of the same survey tool with a fixed preamble: question
polarity markers on row 10, question headers on row 11 and responses from row
12 onwards (0-based indices below). The demographic columns shift by one when
the export carries a `Propiedad` column.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

SHEET_DATA_NAME = "Worksheet"
QUESTION_TYPE_ROW_INDEX = 9
HEADER_ROW_INDEX = 10
DATA_START_INDEX = 11


class ColumnLayout(BaseModel):
    name: str
    gender: int = Field(..., description="Género")
    age: int = Field(..., description="Edad")
    civil: int = Field(..., description="Estado civil")
    school: int = Field(..., description="Nivel de estudios")
    department: int = Field(..., description="Departamento")
    position_type: int = Field(..., description="Tipo de puesto")
    tenure: int = Field(..., description="Tiempo en el puesto actual")
    questions_start: int = Field(..., description="First Likert question column.")
    property_col: Optional[int] = Field(None, description="Propiedad (multi-property exports only).")


# Palacio / Pierre
GENERIC = ColumnLayout(
    name="GENERIC",
    gender=4,
    age=5,
    civil=6,
    school=7,
    department=8,
    position_type=9,
    tenure=12,
    questions_start=14,
)

# Princess: same survey plus a Propiedad column at index 8
PROPERTY = ColumnLayout(
    name="PROPERTY",
    gender=4,
    age=5,
    civil=6,
    school=7,
    property_col=8,
    department=9,
    position_type=10,
    tenure=13,
    questions_start=15,
)

LAYOUTS = {
    "GENERIC": GENERIC,
    "PROPERTY": PROPERTY,
}

# Display label -> ColumnLayout attribute
DEMOGRAPHIC_FIELDS = {
    "Género": "gender",
    "Edad": "age",
    "Estado Civil": "civil",
    "Nivel de Estudios": "school",
    "Tipo de Puesto": "position_type",
    "Tiempo en Puesto": "tenure",
}


def get_layout(name: str) -> ColumnLayout:
    key = (name or "").strip().upper()
    if key not in LAYOUTS:
        raise KeyError(f"Unknown layout '{name}'. Known layouts: {', '.join(LAYOUTS)}")
    return LAYOUTS[key]


def demographic_columns(layout: ColumnLayout) -> Dict[str, int]:
    """Maps each demographic label to its column index for the given layout."""
    return {label: getattr(layout, attr) for label, attr in DEMOGRAPHIC_FIELDS.items()}
