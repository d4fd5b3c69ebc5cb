"""Font resolution for TextStyle.

One cached font per (family, weight, size); measuring and drawing share it.
"""

from __future__ import annotations
import os
from functools import lru_cache
from typing import Tuple

from PIL import ImageFont

from .config import FONT_DIRS, BOLD_WEIGHT_THRESHOLD
from .types import TextStyle
from .logging import log

# family -> (regular files, bold files)
_FONT_FILES = {
    "courier new": (("cour.ttf", "Courier New.ttf", "Courier_New.ttf"),
                    ("courbd.ttf", "Courier New Bold.ttf", "Courier_New_Bold.ttf")),
    "arial": (("arial.ttf", "Arial.ttf"),
              ("arialbd.ttf", "Arial Bold.ttf")),
    "georgia": (("georgia.ttf", "Georgia.ttf"),
                ("georgiab.ttf", "Georgia Bold.ttf")),
    "verdana": (("verdana.ttf", "Verdana.ttf"),
                ("verdanab.ttf", "Verdana Bold.ttf")),
    "segoe ui": (("segoeui.ttf",),
                 ("segoeuib.ttf",)),
}

_FALLBACK_FILES = (("DejaVuSans.ttf", "LiberationSans-Regular.ttf"),
                   ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf"))


def is_bold(weight: str) -> bool:
    """Map a CSS font-weight keyword or number to bold / regular."""
    w = str(weight).strip().lower()
    if w in ("bold", "bolder"):
        return True
    if w.isdigit():
        return int(w) >= BOLD_WEIGHT_THRESHOLD
    return False


def candidate_files(family: str, bold: bool) -> Tuple[str, ...]:
    """Font file names to try for a family, most specific first."""
    idx = 1 if bold else 0
    names = _FONT_FILES.get(family.strip().lower(), ((), ()))[idx]
    return tuple(names) + _FALLBACK_FILES[idx] + _FALLBACK_FILES[0]


def _try_truetype(name: str, size: int):
    # Pillow also searches the platform font directories for bare names
    paths = [name] + [os.path.join(d, name) for d in FONT_DIRS]
    for p in paths:
        try:
            return ImageFont.truetype(p, size)
        except OSError:
            continue
    return None


@lru_cache(maxsize=64)
def load_font(family: str, weight: str, size: int):
    """Load a font for family/weight/size, falling back to Pillow's default."""
    bold = is_bold(weight)
    for name in candidate_files(family, bold):
        font = _try_truetype(name, size)
        if font is not None:
            log(f"[FONT] {family!r} weight={weight} size={size} -> {name}")
            return font
    log(f"[FONT] No file for {family!r}, using default font (size={size})")
    return ImageFont.load_default(size=size)


def resolve_font(style: TextStyle):
    """Font matching the text style's family, weight and size."""
    size = max(1, int(round(float(style.font_size))))
    return load_font(style.font_family, str(style.font_weight), size)
