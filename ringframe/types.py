"""Core data types for ringframe."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .config import (
    DEFAULT_FRAME_COLOR, DEFAULT_FRAME_WIDTH, DEFAULT_ANGLE_DEG,
    DEFAULT_TEXT, DEFAULT_TEXT_COLOR, DEFAULT_TEXT_SIZE,
    DEFAULT_FONT_FAMILY, DEFAULT_FONT_WEIGHT,
    FADE_ZONE, FADE_PAD_DEG,
)


@dataclass
class Point2D:
    """A point or vector in canvas coordinates."""
    x: float = 0.0
    y: float = 0.0

    def translated(self, dx: float, dy: float) -> Point2D:
        return Point2D(self.x + dx, self.y + dy)


@dataclass
class ViewParams:
    """View transformation parameters (scale and pan offset)."""
    scale: float = 1.0
    offx: float = 0.0
    offy: float = 0.0

    @property
    def offset(self) -> Point2D:
        return Point2D(self.offx, self.offy)

    def copy(self) -> ViewParams:
        """Create a copy of this ViewParams."""
        return ViewParams(self.scale, self.offx, self.offy)


@dataclass
class FrameStyle:
    """Ring appearance and the angle the text is centred on."""
    frame_color: str = DEFAULT_FRAME_COLOR
    frame_width: float = DEFAULT_FRAME_WIDTH
    angle_deg: float = DEFAULT_ANGLE_DEG
    fade_zone: float = FADE_ZONE
    fade_pad_deg: float = FADE_PAD_DEG


@dataclass
class TextStyle:
    """Text drawn along the ring."""
    text: str = DEFAULT_TEXT
    text_color: str = DEFAULT_TEXT_COLOR
    font_family: str = DEFAULT_FONT_FAMILY
    font_weight: str = DEFAULT_FONT_WEIGHT
    font_size: float = DEFAULT_TEXT_SIZE


@dataclass
class GlyphPlacement:
    """Angular placement of one character on the ring."""
    char: str
    mid_angle: float  # radians, centre of the glyph
    span: float       # radians occupied by the glyph


@dataclass
class ArcLayout:
    """Result of laying a string out along a circle."""
    glyphs: List[GlyphPlacement] = field(default_factory=list)
    text_ang_len: float = 0.0
    fade_ang: float = 0.0
    start_ang: float = 0.0  # where the fade gradient begins
    r_frame: float = 0.0


@dataclass
class RasterImage:
    """A decoded source image. The core only reads it."""
    image: Optional[Any] = None  # PIL.Image.Image in RGBA mode
    natural_width: int = 0
    natural_height: int = 0
    path: str = ""
    complete: bool = False

    @classmethod
    def from_pil(cls, image: Any, path: str = "") -> RasterImage:
        """Wrap a fully decoded Pillow image."""
        return cls(image=image, natural_width=image.width,
                   natural_height=image.height, path=path, complete=True)

    @property
    def is_ready(self) -> bool:
        """True once decoding finished and dimensions are usable."""
        return (self.complete and self.image is not None and
                self.natural_width > 0 and self.natural_height > 0)


@dataclass
class UIEvent:
    """An event to be processed on the main/UI thread."""
    callback: Callable
    args: tuple
