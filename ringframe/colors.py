"""Colour resolution helpers built on Pillow's CSS colour parser."""

from __future__ import annotations
import re
from typing import Optional, Tuple

from PIL import ImageColor

from .math_utils import clamp
from .logging import log

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

# CSS rgba() with a fractional alpha; Pillow only accepts 0-255 integers here
_CSS_RGBA = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
)


def _parse_css_rgba(spec: str) -> Optional[RGBA]:
    m = _CSS_RGBA.match(spec.strip().lower())
    if not m:
        return None
    r, g, b = (min(255, int(m.group(i))) for i in (1, 2, 3))
    a = clamp(float(m.group(4)), 0.0, 1.0)
    return (r, g, b, int(round(a * 255)))


def resolve_rgb(spec: str) -> Optional[RGB]:
    """Resolve any CSS colour (name, hex, rgb(), hsl(), ...) to an RGB triple.

    Returns None when the specification cannot be resolved.
    """
    if not isinstance(spec, str) or not spec.strip():
        return None
    css = _parse_css_rgba(spec)
    if css is not None:
        return css[:3]
    try:
        rgb = ImageColor.getrgb(spec.strip())
    except ValueError:
        return None
    return (rgb[0], rgb[1], rgb[2])


def color_with_alpha(spec: str, alpha: float) -> str:
    """Re-express a colour specification with the given alpha in [0, 1].

    Unresolvable colours fall back to black with the requested alpha.
    """
    rgb = resolve_rgb(spec)
    if rgb is None:
        log(f"[COLOR][ERR] Cannot resolve {spec!r}, using black")
        rgb = (0, 0, 0)
    a = clamp(float(alpha), 0.0, 1.0)
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {a:g})"


def to_rgba(spec: str) -> RGBA:
    """Resolve a colour specification to an 8-bit RGBA tuple for drawing.

    Unresolvable colours become opaque black.
    """
    if isinstance(spec, str):
        css = _parse_css_rgba(spec)
        if css is not None:
            return css
        try:
            c = ImageColor.getrgb(spec.strip())
        except ValueError:
            c = None
        if c is not None:
            return (c[0], c[1], c[2], c[3] if len(c) > 3 else 255)
    log(f"[COLOR][ERR] Cannot resolve {spec!r}, using black")
    return (0, 0, 0, 255)
