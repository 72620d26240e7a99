"""Tests for the ink data model and drawing.v1 export.

Validates dataclass creation, immutability, validation, drawing append,
and YAML export/import through the pydantic schema.
"""

from __future__ import annotations

import dataclasses

import pytest
import yaml

from inkmark.ink.export import (
    count_strokes,
    drawing_bbox,
    drawing_from_yaml_dict,
    drawing_to_yaml_dict,
    load_drawing,
    save_drawing,
)
from inkmark.ink.model import (
    ControlPoint,
    Drawing,
    InkingTool,
    InkStyle,
    Stroke,
    StrokePath,
)
from inkmark.ink.shapes import ShapeKind, shape_drawing
from inkmark.utils import validators
from inkmark.utils.geometry import Point, Rect, Size


# ---------------------------------------------------------------------------
# Dataclass creation and validation
# ---------------------------------------------------------------------------


class TestModel:
    def test_control_point_defaults(self) -> None:
        p = ControlPoint(location=Point(1.0, 2.0))
        assert p.opacity == 1.0
        assert p.force == 0.0

    def test_control_point_opacity_range(self) -> None:
        with pytest.raises(ValueError, match="opacity must be in \\[0, 1\\]"):
            ControlPoint(location=Point(0.0, 0.0), opacity=1.2)

    @pytest.mark.parametrize("kwargs,match", [
        ({"time_offset": -1.0}, "time_offset must be >= 0"),
        ({"force": -0.1}, "force must be >= 0"),
        ({"size": Size(-1.0, 3.0)}, "size must be non-negative"),
    ])
    def test_control_point_rejects_what_the_file_format_rejects(self, kwargs, match) -> None:
        with pytest.raises(ValueError, match=match):
            ControlPoint(location=Point(0.0, 0.0), **kwargs)

    def test_stroke_path_requires_a_point(self) -> None:
        with pytest.raises(ValueError, match=">= 1 control point"):
            StrokePath(points=())

    def test_stroke_path_single_point_allowed(self) -> None:
        path = StrokePath(points=(ControlPoint(location=Point(3.0, 4.0)),))
        assert len(path) == 1
        assert not path.is_segment

    def test_ink_style_invalid_tool(self) -> None:
        with pytest.raises(ValueError, match="tool must be one of"):
            InkStyle(tool="laser")

    def test_ink_style_invalid_color(self) -> None:
        with pytest.raises(ValueError, match="color must be 4 channels"):
            InkStyle(color=(0, 0, 300, 255))

    def test_inking_tool_negative_width(self) -> None:
        with pytest.raises(ValueError, match="tool width"):
            InkingTool(width=-1.0)

    def test_frozen(self) -> None:
        p = ControlPoint(location=Point(0.0, 0.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.opacity = 0.5  # type: ignore[misc]


class TestDrawing:
    def test_append_keeps_order(self, square_bounds, created_at) -> None:
        rect = shape_drawing(ShapeKind.RECTANGLE, square_bounds, created_at=created_at)
        star = shape_drawing(ShapeKind.STAR, square_bounds, created_at=created_at)
        combined = rect.append(star)
        assert len(combined) == 14
        assert combined.strokes[:4] == rect.strokes
        assert combined.strokes[4:] == star.strokes
        assert len(rect) == 4  # original untouched

    def test_bounds_empty(self) -> None:
        assert Drawing().bounds() is None
        assert drawing_bbox(Drawing()) is None

    def test_bounds_rectangle(self) -> None:
        drawing = shape_drawing(ShapeKind.RECTANGLE, Rect(5.0, 6.0, 10.0, 20.0))
        assert drawing.bounds() == Rect(5.0, 6.0, 10.0, 20.0)
        assert drawing_bbox(drawing) == (5.0, 6.0, 15.0, 26.0)


# ---------------------------------------------------------------------------
# drawing.v1 export
# ---------------------------------------------------------------------------


class TestExport:
    def test_yaml_dict_layout(self, square_bounds, created_at) -> None:
        data = drawing_to_yaml_dict(
            shape_drawing(ShapeKind.TRIANGLE, square_bounds, created_at=created_at)
        )
        assert data["schema"] == "drawing.v1"
        assert len(data["strokes"]) == 3
        first = data["strokes"][0]
        assert first["ink"] == {"tool": "pen", "color": [255, 59, 48, 255]}
        assert first["points"][0]["location"] == [0.0, 90.0]

    def test_save_and_load(self, tmp_path, wide_bounds, created_at) -> None:
        drawing = shape_drawing(ShapeKind.ELLIPSE, wide_bounds, thickness=4.5,
                                opacity=0.8, created_at=created_at)
        path = save_drawing(drawing, tmp_path / "out" / "ellipse.yaml")
        assert path.exists()
        assert load_drawing(path) == drawing
        assert count_strokes(path) == 1

    def test_rejects_wrong_schema(self) -> None:
        with pytest.raises(ValueError, match="Expected schema 'drawing.v1'"):
            drawing_from_yaml_dict({"schema": "stroke.v1", "strokes": []})

    def test_rejects_empty_points(self, created_at) -> None:
        data = {
            "schema": "drawing.v1",
            "strokes": [{
                "ink": {"tool": "pen", "color": [0, 0, 0, 255]},
                "created_at": created_at.isoformat(),
                "points": [],
            }],
        }
        with pytest.raises(ValueError):
            drawing_from_yaml_dict(data)

    def test_load_names_file_on_error(self, tmp_path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text(yaml.safe_dump({"schema": "drawing.v1", "strokes": [{"ink": {}}]}))
        with pytest.raises(ValueError, match="bad.yaml"):
            load_drawing(bad)

    def test_count_strokes_non_mapping(self, tmp_path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- 1\n- 2\n")
        assert count_strokes(f) == 0

    def test_manual_stroke_roundtrip(self, created_at) -> None:
        stroke = Stroke(
            InkStyle(tool="watercolor", color=(10, 20, 30, 128)),
            StrokePath(
                (
                    ControlPoint(Point(0.0, 0.0), 0.0, opacity=0.5, force=0.7, azimuth=1.2, altitude=0.3),
                    ControlPoint(Point(4.0, 1.0), 0.05, opacity=0.5, force=0.9, azimuth=1.1, altitude=0.4),
                ),
                created_at,
            ),
        )
        drawing = Drawing((stroke,))
        assert drawing_from_yaml_dict(drawing_to_yaml_dict(drawing)) == drawing

    def test_boundary_values_roundtrip(self, tmp_path, created_at) -> None:
        point = ControlPoint(Point(-3.0, 0.0), time_offset=0.0, size=Size(0.0, 0.0),
                             opacity=0.0, force=0.0)
        drawing = Drawing((Stroke(InkStyle(), StrokePath((point,), created_at)),))
        assert drawing_from_yaml_dict(drawing_to_yaml_dict(drawing)) == drawing
        assert load_drawing(save_drawing(drawing, tmp_path / "edge.yaml")) == drawing

    def test_validate_drawing_file(self, tmp_path, square_bounds, created_at) -> None:
        path = save_drawing(shape_drawing(ShapeKind.TRIANGLE, square_bounds, created_at=created_at),
                            tmp_path / "tri.yaml")
        record = validators.validate_drawing_file(path)
        assert record.schema_version == validators.DRAWING_SCHEMA
        assert len(record.strokes) == 3
        assert record.strokes[0].points[0].location == (0.0, 90.0)
