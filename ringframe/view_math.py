"""Pure view calculation functions - no side effects, no state mutation."""

from __future__ import annotations

from .types import Point2D, ViewParams
from .math_utils import clamp
from .config import CANVAS_SIZE


def compute_pan_limit(scale: float, frame_width: float,
                      canvas_size: float = CANVAS_SIZE) -> float:
    """Largest allowed |offset| on either axis at the given scale.

    The scaled image must keep covering the ring, so the image may only
    travel as far as its half-extent exceeds the inner ring radius.

    Args:
        scale: Current zoom scale.
        frame_width: Ring thickness in pixels.
        canvas_size: Side of the square canvas.

    Returns:
        Non-negative pan limit. Zero when the image fits inside the ring.
    """
    r = canvas_size / 2 - frame_width
    half = canvas_size * scale / 2
    return max(0.0, half - r)


def clamp_offset(proposed: Point2D, scale: float, frame_width: float,
                 canvas_size: float = CANVAS_SIZE) -> Point2D:
    """Clamp each axis of a proposed offset to [-limit, limit] for this scale."""
    m = compute_pan_limit(scale, frame_width, canvas_size)
    return Point2D(clamp(proposed.x, -m, m), clamp(proposed.y, -m, m))


def fit_scale(img_w: int, img_h: int, canvas_size: float = CANVAS_SIZE) -> float:
    """Scale that makes the smaller image side exactly fill the canvas."""
    if img_w <= 0 or img_h <= 0:
        return 1.0
    return canvas_size / min(img_w, img_h)


def reset_view() -> ViewParams:
    """View used whenever a new image is loaded."""
    return ViewParams(scale=1.0, offx=0.0, offy=0.0)
