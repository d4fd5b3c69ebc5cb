"""Gesture mapper - turns pointer, wheel and touch events into commands.

Event handlers never block: each one builds at most one command and runs it
against the session immediately.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .state import EditorSession

from .commands import (
    Command,
    StartDrag, UpdateDrag, EndDrag,
    WheelZoom, PinchZoom, EndPinch,
)
from .math_utils import distance
from .config import WHEEL_ZOOM_ENABLED

Touch = Tuple[float, float]


@dataclass
class GestureMapper:
    """
    Drag state machine plus stateless wheel and two-finger pinch.

    Usage:
        gestures = GestureMapper(session)
        gestures.pointer_down(10, 10)
        gestures.pointer_move(30, 10)   # pans by (20, 0)
        gestures.pointer_up()
    """
    session: "EditorSession"
    wheel_zoom: bool = WHEEL_ZOOM_ENABLED
    last_command: Optional[Command] = None

    def _run(self, cmd: Command) -> bool:
        self.last_command = cmd
        return cmd.execute(self.session)

    @property
    def is_dragging(self) -> bool:
        return self.session.input.is_dragging

    # Pointer

    def pointer_down(self, x: float, y: float, primary: bool = True) -> bool:
        if not primary:
            return False
        return self._run(StartDrag(x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        if not self.is_dragging:
            return False
        return self._run(UpdateDrag(x, y))

    def pointer_up(self) -> bool:
        return self._run(EndDrag())

    def pointer_leave(self) -> bool:
        return self._run(EndDrag())

    # Wheel

    def wheel(self, delta_y: float) -> bool:
        return self._run(WheelZoom(delta_y, apply=self.wheel_zoom))

    # Touch

    def touch_move(self, touches: Sequence[Touch]) -> bool:
        """Handle a touch frame; only exactly two touches form a pinch."""
        if len(touches) != 2:
            return False
        (ax, ay), (bx, by) = touches
        return self._run(PinchZoom(distance(ax, ay, bx, by)))

    def touch_end(self) -> bool:
        return self._run(EndPinch())
