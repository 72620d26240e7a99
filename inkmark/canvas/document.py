"""Canvas document: appends generated drawings and records undo.

The canvas owns the current ``Drawing`` and an ``UndoStack``.  Appending
snapshots the drawing before the edit, so undo is a plain restore of an
immutable value.  Shape requests are placed in the default region
``Rect(w/3, h/3, w/3, w/3)``: a square of one third of the canvas width
starting one third in on each axis.
"""

from __future__ import annotations

import logging
from typing import Optional

from inkmark.canvas.undo import UndoStack
from inkmark.configs.loader import CanvasConfig
from inkmark.ink.model import Drawing, InkingTool
from inkmark.ink.shapes import ShapeKind, shape_drawing
from inkmark.utils.geometry import Rect, Size

logger = logging.getLogger(__name__)


def default_shape_bounds(canvas_size: Size) -> Rect:
    """Placement for a newly added shape on a canvas of ``canvas_size``."""
    side = canvas_size.width / 3
    return Rect(canvas_size.width / 3, canvas_size.height / 3, side, side)


def undo_action_name(shape: ShapeKind) -> str:
    return f"Undo adding {shape.value}"


class Canvas:
    """Drawing surface with undoable appends.

    Parameters
    ----------
    size : Size
        Canvas extent in points.
    tool : InkingTool, optional
        Active tool passed to the shape generator.
    drawing : Drawing, optional
        Initial content.
    undo_limit : int
        Undo history depth, 0 for unlimited.
    """

    def __init__(
        self,
        size: Size,
        tool: Optional[InkingTool] = None,
        drawing: Optional[Drawing] = None,
        undo_limit: int = 0,
    ):
        self.size = size
        self.tool = tool
        self.drawing = drawing if drawing is not None else Drawing()
        self.undo_stack = UndoStack(limit=undo_limit)

    @classmethod
    def from_config(cls, cfg: CanvasConfig, tool: Optional[InkingTool] = None) -> Canvas:
        """Empty canvas sized and limited by the ``canvas:`` config section."""
        return cls(Size(cfg.width, cfg.height), tool=tool, undo_limit=cfg.undo_limit)

    def _set_drawing(self, drawing: Drawing) -> None:
        self.drawing = drawing

    def append(self, drawing: Drawing, action_name: str) -> None:
        """Append ``drawing`` on top of the current content, undoably."""
        original = self.drawing
        updated = original.append(drawing)
        self.undo_stack.register(
            action_name,
            undo=lambda: self._set_drawing(original),
            redo=lambda: self._set_drawing(updated),
        )
        self.drawing = updated
        logger.debug("%s registered, canvas has %d strokes", action_name, len(updated))

    def draw_shape(
        self,
        shape: ShapeKind,
        bounds: Optional[Rect] = None,
        **style,
    ) -> Drawing:
        """Generate ``shape`` and append it.

        Parameters
        ----------
        shape : ShapeKind
            Shape to add.
        bounds : Rect, optional
            Target region; defaults to :func:`default_shape_bounds`.
        **style
            ``opacity``, ``thickness`` or ``ink`` forwarded to
            :func:`inkmark.ink.shapes.shape_drawing`.

        Returns
        -------
        Drawing
            The generated shape (not the whole canvas).
        """
        bounds = bounds or default_shape_bounds(self.size)
        drawing = shape_drawing(shape, bounds, self.tool, **style)
        self.append(drawing, undo_action_name(shape))
        return drawing

    def undo(self) -> Optional[str]:
        return self.undo_stack.undo()

    def redo(self) -> Optional[str]:
        return self.undo_stack.redo()
