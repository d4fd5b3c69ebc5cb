"""Arc text layout - places a string along a circle glyph by glyph.

Glyphs are spaced by their measured advance width rather than by fixed
angular slices, so proportional fonts keep their natural rhythm on the
ring. The string is centred on the target angle and laid out towards
decreasing angles.
"""

from __future__ import annotations
import math
from typing import Callable, Tuple

from .types import ArcLayout, GlyphPlacement
from .math_utils import angular_length, deg_to_rad
from .config import FADE_ZONE, FADE_PAD_DEG

MeasureFn = Callable[[str], float]


def layout_arc_text(
    text: str,
    measure: MeasureFn,
    angle_deg: float,
    r_frame: float,
    fade_zone: float = FADE_ZONE,
    fade_pad_deg: float = FADE_PAD_DEG,
) -> ArcLayout:
    """Compute per-glyph angles and the fade region for text on a ring.

    Args:
        text: String to lay out. May be empty.
        measure: Advance width in pixels of a string, using the same font
            that will draw it.
        angle_deg: Angle (degrees) the text is centred on.
        r_frame: Radius of the ring centre line.
        fade_zone: Fraction of the text's angular length added as fade on
            each side.
        fade_pad_deg: Fixed fade padding in degrees.

    Returns:
        ArcLayout with glyph placements, the text's angular length, the fade
        angle and the gradient start angle.
    """
    center = deg_to_rad(angle_deg)
    if text and r_frame > 0:
        text_ang_len = angular_length(measure(text), r_frame)
    else:
        text_ang_len = 0.0

    fade_ang = text_ang_len * fade_zone + deg_to_rad(fade_pad_deg)
    layout = ArcLayout(
        text_ang_len=text_ang_len,
        fade_ang=fade_ang,
        start_ang=center - text_ang_len / 2 - fade_ang,
        r_frame=r_frame,
    )
    if not text or r_frame <= 0:
        return layout

    current = center + text_ang_len / 2
    for ch in text:
        span = angular_length(measure(ch), r_frame)
        layout.glyphs.append(GlyphPlacement(char=ch, mid_angle=current - span / 2, span=span))
        current -= span
    return layout


def glyph_position(glyph: GlyphPlacement, cx: float, cy: float,
                   r_frame: float) -> Tuple[float, float, float]:
    """Anchor point and rotation for drawing a glyph tangent to the ring.

    Returns:
        (x, y, rotation) with rotation in radians.
    """
    mid = glyph.mid_angle
    return (cx + r_frame * math.cos(mid),
            cy + r_frame * math.sin(mid),
            mid - math.pi / 2)
