"""YAML schema validation for drawing files.

Provides pydantic models for the ``drawing.v1`` file format written by
``inkmark.ink.export``:
    - ControlPointV1: one stroke sample (location, size, opacity, pen attitude)
    - InkV1: tool kind + RGBA color
    - StrokeV1: ink, creation timestamp, ordered control points
    - DrawingFileV1: schema tag + ordered strokes

Also owns the ink tool vocabulary (TOOL_KINDS) so the schema and the ink
model agree on one list.

Units:
    - Geometry: points, top-left origin, +Y down
    - Color: 8-bit channels [0, 255]
    - Opacity: [0.0, 1.0]

Usage:
    from inkmark.utils import validators
    drawing_file = validators.validate_drawing_file("shape.yaml")
"""

from datetime import datetime
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import fs

TOOL_KINDS = (
    "pen",
    "pencil",
    "marker",
    "monoline",
    "fountain_pen",
    "watercolor",
    "crayon",
)

DRAWING_SCHEMA = "drawing.v1"


class ControlPointV1(BaseModel):
    """Single stroke sample."""
    location: Tuple[float, float] = Field(..., description="(x, y) in points")
    time_offset: float = Field(0.0, ge=0.0, description="Seconds since stroke start")
    size: Tuple[float, float] = Field(..., description="(width, height) thickness")
    opacity: float = Field(1.0, ge=0.0, le=1.0)
    force: float = Field(0.0, ge=0.0, description="Pen pressure")
    azimuth: float = Field(0.0)
    altitude: float = Field(0.0)

    @field_validator('size')
    @classmethod
    def validate_size(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        if v[0] < 0 or v[1] < 0:
            raise ValueError(f"Control point size must be non-negative, got {v}")
        return v


class InkV1(BaseModel):
    """Ink appearance."""
    tool: str = Field("pen", description=f"One of {', '.join(TOOL_KINDS)}")
    color: Tuple[int, int, int, int] = Field(..., description="RGBA, 0-255 per channel")

    @field_validator('tool')
    @classmethod
    def validate_tool(cls, v: str) -> str:
        if v not in TOOL_KINDS:
            raise ValueError(f"Unknown ink tool '{v}', expected one of {TOOL_KINDS}")
        return v

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: Tuple[int, int, int, int]) -> Tuple[int, int, int, int]:
        for channel in v:
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel {channel} out of range [0, 255]")
        return v


class StrokeV1(BaseModel):
    """One stroke: ink plus an ordered, non-empty path."""
    ink: InkV1
    created_at: datetime
    points: List[ControlPointV1] = Field(..., min_length=1)


class DrawingFileV1(BaseModel):
    """Drawing file (drawing.v1 schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(DRAWING_SCHEMA, alias="schema")
    strokes: List[StrokeV1] = Field(default_factory=list)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != DRAWING_SCHEMA:
            raise ValueError(f"Expected schema '{DRAWING_SCHEMA}', got '{v}'")
        return v


def validate_drawing_dict(data: dict) -> DrawingFileV1:
    """Validate an in-memory drawing.v1 mapping.

    Raises
    ------
    ValueError
        With pydantic's field-level report if validation fails.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Drawing data must be a mapping, got {type(data).__name__}")
    try:
        return DrawingFileV1.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {DRAWING_SCHEMA} drawing:\n{e}") from e


def validate_drawing_file(path: Union[str, Path]) -> DrawingFileV1:
    """Load and validate a drawing.v1 YAML file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the content doesn't match the schema (message names the file)
    """
    data = fs.load_yaml(path)
    try:
        return validate_drawing_dict(data)
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e
