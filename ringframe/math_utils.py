"""Pure math utilities - no external dependencies."""

from __future__ import annotations
import math

from .config import MIN_SCALE, MAX_SCALE


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]. Requires a <= b."""
    return a if v < a else b if v > b else v


def clamp_scale(s: float) -> float:
    """Clamp a zoom scale to the allowed [MIN_SCALE, MAX_SCALE] range."""
    return clamp(s, MIN_SCALE, MAX_SCALE)


def angular_length(pixel_width: float, radius: float) -> float:
    """Angle in radians subtended by an arc of pixel_width on a circle of radius."""
    return pixel_width / radius


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)
