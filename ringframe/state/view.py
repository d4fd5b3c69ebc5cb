"""View state - pan offset and zoom scale, always kept within bounds."""

from __future__ import annotations
from dataclasses import dataclass, field

from ..types import Point2D, ViewParams
from ..math_utils import clamp_scale
from ..view_math import clamp_offset, compute_pan_limit, reset_view
from ..config import CANVAS_SIZE, DEFAULT_FRAME_WIDTH


@dataclass
class ViewState:
    """Owns the pan offset and zoom scale of one editing session.

    The offset bounds depend on scale and frame width, so every change to
    either re-clamps the offset.
    """
    view: ViewParams = field(default_factory=ViewParams)
    frame_width: float = DEFAULT_FRAME_WIDTH
    canvas_size: int = CANVAS_SIZE

    @property
    def scale(self) -> float:
        """Current zoom scale."""
        return self.view.scale

    @property
    def offset(self) -> Point2D:
        """Current pan offset."""
        return self.view.offset

    @property
    def pan_limit(self) -> float:
        return compute_pan_limit(self.view.scale, self.frame_width, self.canvas_size)

    def clamp_offset(self, proposed: Point2D) -> Point2D:
        return clamp_offset(proposed, self.view.scale, self.frame_width, self.canvas_size)

    def _set_offset(self, off: Point2D) -> Point2D:
        self.view.offx, self.view.offy = off.x, off.y
        return off

    def reclamp(self) -> Point2D:
        """Re-apply offset bounds for the current scale and frame width."""
        return self._set_offset(self.clamp_offset(self.view.offset))

    def apply_pan(self, delta: Point2D) -> Point2D:
        """Add delta to the offset, clamp, and return the new offset."""
        proposed = self.view.offset.translated(delta.x, delta.y)
        return self._set_offset(self.clamp_offset(proposed))

    def set_scale(self, scale: float) -> float:
        """Set scale (clamped), then re-clamp the offset against it."""
        self.view.scale = clamp_scale(scale)
        self.reclamp()
        return self.view.scale

    def apply_zoom_delta(self, delta: float) -> float:
        """Add delta to scale (clamped), re-clamp the offset, return new scale."""
        return self.set_scale(self.view.scale + delta)

    def set_frame_width(self, frame_width: float) -> None:
        self.frame_width = frame_width
        self.reclamp()

    def reset(self) -> None:
        """Forget pan/zoom, used when a new image is loaded."""
        self.view = reset_view()

    def snapshot(self) -> ViewParams:
        return self.view.copy()
