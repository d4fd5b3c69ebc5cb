"""Input state - pointer drag and pinch tracking."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class InputState:
    """State for gesture handling within one pointer session."""
    is_dragging: bool = False
    last_pos: Tuple[float, float] = (0.0, 0.0)
    pinch_prev: Optional[float] = None

    def start_drag(self, x: float, y: float) -> None:
        """Start dragging from the given pointer position."""
        self.is_dragging = True
        self.last_pos = (x, y)

    def end_drag(self) -> bool:
        """End dragging. Returns True if was dragging."""
        was_dragging = self.is_dragging
        self.is_dragging = False
        return was_dragging

    def advance_drag(self, x: float, y: float) -> Tuple[float, float]:
        """Delta from the last recorded position; records the new one."""
        dx = x - self.last_pos[0]
        dy = y - self.last_pos[1]
        self.last_pos = (x, y)
        return (dx, dy)

    def advance_pinch(self, distance: float) -> float:
        """Distance change since the previous two-touch frame.

        The first frame of a pinch only records the baseline and yields 0.
        """
        if self.pinch_prev is None:
            self.pinch_prev = distance
        delta = distance - self.pinch_prev
        self.pinch_prev = distance
        return delta

    def end_pinch(self) -> None:
        self.pinch_prev = None

    @property
    def is_pinching(self) -> bool:
        return self.pinch_prev is not None
