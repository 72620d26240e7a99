"""Undo/redo history for canvas edits.

Each entry pairs a human-readable action name with two callables: one
that restores the state before the edit and one that re-applies it.
The stack holds no canvas state of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """One undoable edit."""

    action_name: str
    undo: Callable[[], None]
    redo: Callable[[], None]


class UndoStack:
    """LIFO undo history with redo.

    Parameters
    ----------
    limit : int
        Maximum entries kept; the oldest are dropped first.  0 means
        unlimited.
    """

    def __init__(self, limit: int = 0):
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self.limit = limit
        self._undo: List[UndoEntry] = []
        self._redo: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_action_name(self) -> Optional[str]:
        return self._undo[-1].action_name if self._undo else None

    @property
    def redo_action_name(self) -> Optional[str]:
        return self._redo[-1].action_name if self._redo else None

    def register(
        self,
        action_name: str,
        undo: Callable[[], None],
        redo: Callable[[], None],
    ) -> None:
        """Record an edit that has just been applied.  Clears redo history."""
        self._undo.append(UndoEntry(action_name, undo, redo))
        self._redo.clear()
        if self.limit and len(self._undo) > self.limit:
            dropped = self._undo.pop(0)
            logger.debug("Undo limit %d reached, dropped '%s'", self.limit, dropped.action_name)

    def undo(self) -> Optional[str]:
        """Revert the latest edit; returns its name, None if nothing to undo."""
        if not self._undo:
            return None
        entry = self._undo.pop()
        entry.undo()
        self._redo.append(entry)
        return entry.action_name

    def redo(self) -> Optional[str]:
        """Re-apply the latest undone edit; returns its name or None."""
        if not self._redo:
            return None
        entry = self._redo.pop()
        entry.redo()
        self._undo.append(entry)
        return entry.action_name

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
