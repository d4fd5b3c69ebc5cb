"""Input Handler - maps raylib input events to gestures and commands.

Pointer, wheel and touch input is forwarded to the GestureMapper as events.
Keyboard shortcuts become commands that the Application executes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .state import EditorSession
    from .gestures import GestureMapper

from .rl_compat import rl, get_touch_points
from .commands import Command, SetZoom, UpdateStyle, ExportFrame, CloseApp
from .config import (
    KEY_ZOOM_IN, KEY_ZOOM_OUT, KEY_ANGLE_UP, KEY_ANGLE_DOWN, KEY_EXPORT, KEY_CLOSE,
    ZOOM_STEP_KEYS, ANGLE_MIN, ANGLE_MAX, WHEEL_DELTA_PER_NOTCH,
)


@dataclass
class MouseState:
    """Current mouse state snapshot."""
    x: float = 0.0
    y: float = 0.0
    left_pressed: bool = False
    left_released: bool = False
    left_down: bool = False
    wheel: float = 0.0


@dataclass
class InputHandler:
    """Handles input polling for the editor window."""

    # Area of the window the canvas is shown in (x, y, w, h)
    canvas_rect: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    export_path: Optional[str] = None

    _touch_count: int = 0
    _was_inside: bool = False

    key_zoom_in: int = KEY_ZOOM_IN
    key_zoom_out: int = KEY_ZOOM_OUT
    key_angle_up: int = KEY_ANGLE_UP
    key_angle_down: int = KEY_ANGLE_DOWN
    key_export: int = KEY_EXPORT
    key_close: int = KEY_CLOSE

    def poll_mouse(self) -> MouseState:
        """Get current mouse state."""
        pos = rl.GetMousePosition()
        return MouseState(
            x=pos.x,
            y=pos.y,
            left_pressed=rl.IsMouseButtonPressed(rl.MOUSE_BUTTON_LEFT),
            left_released=rl.IsMouseButtonReleased(rl.MOUSE_BUTTON_LEFT),
            left_down=rl.IsMouseButtonDown(rl.MOUSE_BUTTON_LEFT),
            wheel=rl.GetMouseWheelMove(),
        )

    def is_over_canvas(self, mouse: MouseState) -> bool:
        x, y, w, h = self.canvas_rect
        return x <= mouse.x <= x + w and y <= mouse.y <= y + h

    def poll(self, session: "EditorSession", gestures: "GestureMapper") -> List[Command]:
        """Forward gestures for this frame and return keyboard commands."""
        mouse = self.poll_mouse()
        inside = self.is_over_canvas(mouse)

        if mouse.left_pressed and inside:
            gestures.pointer_down(mouse.x, mouse.y)
        elif gestures.is_dragging:
            if mouse.left_released:
                gestures.pointer_up()
            elif self._was_inside and not inside:
                gestures.pointer_leave()
            else:
                gestures.pointer_move(mouse.x, mouse.y)
        self._was_inside = inside

        if mouse.wheel and inside:
            gestures.wheel(-mouse.wheel * WHEEL_DELTA_PER_NOTCH)

        touches = get_touch_points()
        if len(touches) == 2:
            gestures.touch_move(touches)
        elif self._touch_count == 2:
            gestures.touch_end()
        self._touch_count = len(touches)

        return self._poll_keys(session)

    def _poll_keys(self, session: "EditorSession") -> List[Command]:
        commands: List[Command] = []
        if rl.IsKeyPressed(self.key_close):
            commands.append(CloseApp())
        if rl.IsKeyPressed(self.key_zoom_in):
            commands.append(SetZoom(session.view.scale + ZOOM_STEP_KEYS))
        if rl.IsKeyPressed(self.key_zoom_out):
            commands.append(SetZoom(session.view.scale - ZOOM_STEP_KEYS))
        if rl.IsKeyPressed(self.key_angle_up):
            angle = min(ANGLE_MAX, session.frame.angle_deg + 5)
            commands.append(UpdateStyle({"angle_deg": angle}))
        if rl.IsKeyPressed(self.key_angle_down):
            angle = max(ANGLE_MIN, session.frame.angle_deg - 5)
            commands.append(UpdateStyle({"angle_deg": angle}))
        if rl.IsKeyPressed(self.key_export):
            commands.append(ExportFrame(self.export_path) if self.export_path else ExportFrame())
        return commands


# Singleton instance
_input_handler: Optional[InputHandler] = None


def get_input_handler() -> InputHandler:
    """Get the input handler instance."""
    global _input_handler
    if _input_handler is None:
        _input_handler = InputHandler()
    return _input_handler
