"""Command Pattern for input handling.

Commands encapsulate actions that can be triggered by various inputs.
Each command has an execute() method and optional can_execute() for guards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .state import EditorSession

from .types import Point2D
from .math_utils import clamp_scale
from .config import WHEEL_ZOOM_FACTOR, PINCH_ZOOM_FACTOR, WHEEL_ZOOM_ENABLED, EXPORT_FILENAME
from .logging import log


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, session: "EditorSession") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, session: "EditorSession") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Drag Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class StartDrag(Command):
    """Primary pointer pressed: begin dragging."""
    x: float
    y: float

    def execute(self, session: "EditorSession") -> bool:
        session.input.start_drag(self.x, self.y)
        return True


@dataclass
class UpdateDrag(Command):
    """Pointer moved while dragging: pan by the movement since last event."""
    x: float
    y: float

    def can_execute(self, session: "EditorSession") -> bool:
        return session.input.is_dragging

    def execute(self, session: "EditorSession") -> bool:
        if not self.can_execute(session):
            return False
        dx, dy = session.input.advance_drag(self.x, self.y)
        session.pan(Point2D(dx, dy))
        return True


@dataclass
class EndDrag(Command):
    """Pointer released or left the surface."""

    def execute(self, session: "EditorSession") -> bool:
        return session.input.end_drag()


# ═══════════════════════════════════════════════════════════════════════════
# Zoom Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class WheelZoom(Command):
    """Mouse wheel.

    The zoom is computed but only committed when ``apply`` is set; the offset
    is re-clamped either way.
    """
    delta_y: float
    factor: float = WHEEL_ZOOM_FACTOR
    apply: bool = WHEEL_ZOOM_ENABLED

    def target_scale(self, session: "EditorSession") -> float:
        return clamp_scale(session.view.scale - self.delta_y * self.factor)

    def execute(self, session: "EditorSession") -> bool:
        target = self.target_scale(session)
        if self.apply:
            session.set_zoom(target)
        else:
            session.reclamp()
        return self.apply


@dataclass
class PinchZoom(Command):
    """Two active touches at the given distance."""
    distance: float
    factor: float = PINCH_ZOOM_FACTOR

    def execute(self, session: "EditorSession") -> bool:
        delta = session.input.advance_pinch(self.distance)
        if delta == 0:
            session.reclamp()
            return False
        session.zoom_by(delta * self.factor)
        return True


@dataclass
class EndPinch(Command):
    """Touches lifted: the next pinch starts from a fresh baseline."""

    def execute(self, session: "EditorSession") -> bool:
        was_pinching = session.input.is_pinching
        session.input.end_pinch()
        return was_pinching


@dataclass
class SetZoom(Command):
    """Zoom slider: set the scale directly."""
    scale: float

    def execute(self, session: "EditorSession") -> bool:
        before = session.view.scale
        after = session.set_zoom(self.scale)
        log(f"[CMD] SetZoom: {before:.2f} -> {after:.2f}")
        return after != before


# ═══════════════════════════════════════════════════════════════════════════
# Style / Output Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class UpdateStyle(Command):
    """Change any FrameStyle / TextStyle fields by name."""
    changes: Dict[str, Any] = field(default_factory=dict)

    def execute(self, session: "EditorSession") -> bool:
        if not self.changes:
            return False
        before = (session.frame, session.text)
        session.update_styles(**self.changes)
        changed = (session.frame, session.text) != before
        log(f"[CMD] UpdateStyle: {self.changes} changed={changed}")
        return changed


@dataclass
class ExportFrame(Command):
    """Write the current rendered frame as PNG."""
    path: str = EXPORT_FILENAME

    def can_execute(self, session: "EditorSession") -> bool:
        return session.has_frame

    def execute(self, session: "EditorSession") -> bool:
        if not self.can_execute(session):
            log("[CMD] ExportFrame: nothing rendered yet")
            return False
        from .export import save_png
        try:
            save_png(session.pixels, self.path)
        except OSError as e:
            log(f"[CMD][ERR] ExportFrame failed: {e!r}")
            return False
        return True


@dataclass
class CloseApp(Command):
    """Close the application."""

    def execute(self, session: "EditorSession") -> bool:
        log("[CMD] CloseApp")
        return True
