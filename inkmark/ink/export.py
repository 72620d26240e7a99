"""Drawing serialization to and from drawing.v1 YAML.

Provides:
    - drawing_to_yaml_dict() ↔ drawing_from_yaml_dict()
    - save_drawing() / load_drawing(): atomic YAML files, schema-validated
    - drawing_bbox(): bounding box tuple for quick inspection
    - count_strokes(): stroke count of a saved file

YAML format (drawing.v1):
    schema: drawing.v1
    strokes:
      - ink: {tool: pen, color: [255, 59, 48, 255]}
        created_at: 2026-03-02T09:14:55+00:00
        points:
          - {location: [0.0, 0.0], time_offset: 0.0, size: [3.0, 3.0],
             opacity: 1.0, force: 0.0, azimuth: 0.0, altitude: 0.0}

Schema checks live in ``inkmark.utils.validators``; this module only maps
between the validated records and the ink model.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from inkmark.ink.model import ControlPoint, Drawing, InkStyle, Stroke, StrokePath
from inkmark.utils import fs, validators
from inkmark.utils.geometry import Point, Size


def drawing_to_yaml_dict(drawing: Drawing) -> Dict:
    """Convert a drawing to a YAML-compatible drawing.v1 mapping."""
    return {
        'schema': validators.DRAWING_SCHEMA,
        'strokes': [
            {
                'ink': {'tool': stroke.ink.tool, 'color': list(stroke.ink.color)},
                'created_at': stroke.path.created_at.isoformat(),
                'points': [
                    {
                        'location': [p.location.x, p.location.y],
                        'time_offset': p.time_offset,
                        'size': [p.size.width, p.size.height],
                        'opacity': p.opacity,
                        'force': p.force,
                        'azimuth': p.azimuth,
                        'altitude': p.altitude,
                    }
                    for p in stroke.path.points
                ],
            }
            for stroke in drawing.strokes
        ],
    }


def drawing_from_yaml_dict(data: Dict) -> Drawing:
    """Validate a drawing.v1 mapping and build the drawing.

    Raises
    ------
    ValueError
        If the mapping doesn't match the schema.
    """
    return _drawing_from_record(validators.validate_drawing_dict(data))


def _drawing_from_record(record: validators.DrawingFileV1) -> Drawing:
    strokes = []
    for s in record.strokes:
        points = tuple(
            ControlPoint(
                location=Point(*p.location),
                time_offset=p.time_offset,
                size=Size(*p.size),
                opacity=p.opacity,
                force=p.force,
                azimuth=p.azimuth,
                altitude=p.altitude,
            )
            for p in s.points
        )
        ink = InkStyle(tool=s.ink.tool, color=tuple(s.ink.color))
        strokes.append(Stroke(ink, StrokePath(points, s.created_at)))
    return Drawing(tuple(strokes))


def save_drawing(drawing: Drawing, path: Union[str, Path]) -> Path:
    """Write ``drawing`` as drawing.v1 YAML atomically; returns the path."""
    path = Path(path)
    fs.atomic_yaml_dump(drawing_to_yaml_dict(drawing), path)
    return path


def load_drawing(path: Union[str, Path]) -> Drawing:
    """Load and validate a drawing.v1 YAML file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the content fails validation (message names the file)
    """
    return _drawing_from_record(validators.validate_drawing_file(path))


def drawing_bbox(drawing: Drawing) -> Optional[Tuple[float, float, float, float]]:
    """(xmin, ymin, xmax, ymax) over all control points, None when empty."""
    box = drawing.bounds()
    if box is None:
        return None
    return (box.min_x, box.min_y, box.max_x, box.max_y)


def count_strokes(path: Union[str, Path]) -> int:
    """Number of strokes in a drawing file (0 if the file has no list)."""
    data = fs.load_yaml(path)
    strokes = data.get('strokes') if isinstance(data, dict) else None
    return len(strokes) if isinstance(strokes, list) else 0
