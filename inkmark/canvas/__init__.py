"""
Canvas append/undo adapter for generated drawings.
"""

from inkmark.canvas.document import Canvas, default_shape_bounds, undo_action_name
from inkmark.canvas.undo import UndoEntry, UndoStack

__all__ = [
    "Canvas",
    "UndoEntry",
    "UndoStack",
    "default_shape_bounds",
    "undo_action_name",
]
