"""Drawing surface - a small canvas-like 2D API over a Pillow RGBA buffer.

The renderer only needs a handful of operations: circular clipping, affine
transforms, drawing an image under the current transform, stroking a circle
with a solid colour or a conic gradient, and drawing rotated glyphs. Pixel
maths for anti-aliased circles and the conic gradient runs on numpy.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageChops, ImageDraw

from .colors import RGBA, to_rgba
from .transforms import Affine, placement_transform
from .config import CANVAS_SIZE

Box = Tuple[int, int, int, int]


class UnsupportedCapability(NotImplementedError):
    """Raised when a surface is asked for an operation it does not support."""


@dataclass(frozen=True)
class SurfaceCapabilities:
    """Optional features of a drawing surface, checked once per session."""
    conic_gradient: bool = True


@dataclass
class ConicGradient:
    """Angular gradient around (cx, cy), starting at start_angle (radians).

    Offsets run clockwise on screen from 0 at start_angle to 1 after a full
    turn. Colours before the first / after the last stop are held constant.
    """
    start_angle: float
    cx: float
    cy: float
    stops: List[Tuple[float, RGBA]] = field(default_factory=list)

    def add_color_stop(self, offset: float, color: str) -> None:
        offset = min(1.0, max(0.0, float(offset)))
        self.stops.append((offset, to_rgba(color)))
        self.stops.sort(key=lambda s: s[0])

    def offsets_at(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Gradient offset in [0, 1) for each pixel position."""
        ang = np.arctan2(ys - self.cy, xs - self.cx) - self.start_angle
        return np.mod(ang, 2 * math.pi) / (2 * math.pi)

    def sample(self, offsets: np.ndarray) -> np.ndarray:
        """RGBA colours (float, 0-255) at the given offsets."""
        out = np.zeros(offsets.shape + (4,), dtype=np.float64)
        if not self.stops:
            return out
        pos = [s[0] for s in self.stops]
        for ch in range(4):
            out[..., ch] = np.interp(offsets, pos, [s[1][ch] for s in self.stops])
        return out


Paint = Union[str, ConicGradient]


@dataclass
class _DrawState:
    transform: Affine
    clip: Optional[Image.Image]  # "L" mask covering the whole surface


def circle_coverage(size: Tuple[int, int], cx: float, cy: float, r: float,
                    box: Optional[Box] = None) -> np.ndarray:
    """Anti-aliased coverage (0..1) of a filled circle over pixel centres."""
    x0, y0, x1, y1 = box if box else (0, 0, size[0], size[1])
    ys, xs = np.mgrid[y0:y1, x0:x1]
    d = np.hypot(xs + 0.5 - cx, ys + 0.5 - cy)
    return np.clip(r - d + 0.5, 0.0, 1.0)


def ring_coverage(size: Tuple[int, int], cx: float, cy: float, r: float,
                  width: float, box: Optional[Box] = None) -> np.ndarray:
    """Anti-aliased coverage of an annulus of the given stroke width."""
    x0, y0, x1, y1 = box if box else (0, 0, size[0], size[1])
    ys, xs = np.mgrid[y0:y1, x0:x1]
    d = np.hypot(xs + 0.5 - cx, ys + 0.5 - cy)
    return np.clip(width / 2 - np.abs(d - r) + 0.5, 0.0, 1.0)


class PillowSurface:
    """Square RGBA drawing surface with a save/restore state stack."""

    def __init__(self, size: int = CANVAS_SIZE, conic_gradient: bool = True):
        self.size = int(size)
        self._caps = SurfaceCapabilities(conic_gradient=conic_gradient)
        self._image = Image.new("RGBA", (self.size, self.size), (0, 0, 0, 0))
        self._state = _DrawState(transform=Affine.identity(), clip=None)
        self._stack: List[_DrawState] = []

    # ═══════════════════════════════════════════════════════════════════════
    # State
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def capabilities(self) -> SurfaceCapabilities:
        return self._caps

    @property
    def transform(self) -> Affine:
        return self._state.transform

    @property
    def depth(self) -> int:
        """Number of saved states."""
        return len(self._stack)

    def save(self) -> None:
        self._stack.append(_DrawState(self._state.transform, self._state.clip))

    def restore(self) -> None:
        if self._stack:
            self._state = self._stack.pop()

    def reset(self) -> None:
        """Drop all saved states, transform and clip."""
        self._stack.clear()
        self._state = _DrawState(transform=Affine.identity(), clip=None)

    def translate(self, tx: float, ty: float) -> None:
        self._state.transform = self._state.transform.translate(tx, ty)

    def scale(self, sx: float, sy: Optional[float] = None) -> None:
        self._state.transform = self._state.transform.scale(sx, sy)

    def rotate(self, theta: float) -> None:
        self._state.transform = self._state.transform.rotate(theta)

    def apply_transform(self, t: Affine) -> None:
        """Post-multiply the current transform, like canvas transform()."""
        self._state.transform = self._state.transform.multiply(t)

    def clear(self) -> None:
        self._image = Image.new("RGBA", (self.size, self.size), (0, 0, 0, 0))

    def snapshot(self) -> Image.Image:
        """Copy of the current pixel buffer."""
        return self._image.copy()

    # ═══════════════════════════════════════════════════════════════════════
    # Clipping and compositing
    # ═══════════════════════════════════════════════════════════════════════

    def _map_circle(self, cx: float, cy: float, r: float) -> Tuple[float, float, float]:
        t = self._state.transform
        mx, my = t.apply(cx, cy)
        return mx, my, r * t.uniform_scale()

    def clip_circle(self, cx: float, cy: float, r: float) -> None:
        """Intersect the clip region with a circle (in current user space)."""
        mx, my, mr = self._map_circle(cx, cy, r)
        cov = circle_coverage((self.size, self.size), mx, my, max(0.0, mr))
        mask = Image.fromarray((cov * 255).round().astype(np.uint8))
        if self._state.clip is not None:
            mask = ImageChops.multiply(self._state.clip, mask)
        self._state.clip = mask

    def _composite(self, layer: Image.Image, dest: Tuple[int, int] = (0, 0)) -> None:
        """Composite an RGBA layer at dest, honouring the clip and bounds."""
        x, y = dest
        w, h = layer.size
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.size, x + w), min(self.size, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        if (x0, y0, x1, y1) != (x, y, x + w, y + h):
            layer = layer.crop((x0 - x, y0 - y, x1 - x, y1 - y))
        if self._state.clip is not None:
            clip = self._state.clip.crop((x0, y0, x1, y1))
            layer = layer.copy()
            layer.putalpha(ImageChops.multiply(layer.getchannel("A"), clip))
        self._image.alpha_composite(layer, (x0, y0))

    # ═══════════════════════════════════════════════════════════════════════
    # Drawing
    # ═══════════════════════════════════════════════════════════════════════

    def draw_image(self, image: Image.Image, dx: float, dy: float,
                   dw: float, dh: float) -> None:
        """Draw the whole image into (dx, dy, dw, dh) under the current transform."""
        if image.width <= 0 or image.height <= 0 or dw <= 0 or dh <= 0:
            return
        src = image if image.mode == "RGBA" else image.convert("RGBA")
        full = self._state.transform.multiply(
            placement_transform(src.width, src.height, dx, dy, dw, dh))
        layer = src.transform(
            (self.size, self.size),
            Image.Transform.AFFINE,
            full.pil_affine_data(),
            resample=Image.Resampling.BICUBIC,
        )
        self._composite(layer)

    def create_conic_gradient(self, start_angle: float, cx: float, cy: float) -> ConicGradient:
        if not self._caps.conic_gradient:
            raise UnsupportedCapability("conic gradients are not supported by this surface")
        mx, my = self._state.transform.apply(cx, cy)
        return ConicGradient(start_angle=start_angle, cx=mx, cy=my)

    def stroke_circle(self, cx: float, cy: float, r: float,
                      line_width: float, paint: Paint) -> None:
        """Stroke a full circle. Caps are invisible on a closed circle."""
        mx, my, mr = self._map_circle(cx, cy, r)
        lw = line_width * self._state.transform.uniform_scale()
        if lw <= 0:
            return
        reach = mr + lw / 2 + 1
        box = (max(0, int(math.floor(mx - reach))), max(0, int(math.floor(my - reach))),
               min(self.size, int(math.ceil(mx + reach))), min(self.size, int(math.ceil(my + reach))))
        if box[0] >= box[2] or box[1] >= box[3]:
            return

        cov = ring_coverage((self.size, self.size), mx, my, mr, lw, box)
        if isinstance(paint, ConicGradient):
            ys, xs = np.mgrid[box[1]:box[3], box[0]:box[2]]
            rgba = paint.sample(paint.offsets_at(xs + 0.5, ys + 0.5))
        else:
            rgba = np.empty(cov.shape + (4,), dtype=np.float64)
            rgba[...] = to_rgba(paint)
        rgba[..., 3] *= cov
        layer = Image.fromarray(np.clip(rgba.round(), 0, 255).astype(np.uint8))
        self._composite(layer, (box[0], box[1]))

    def measure_text(self, text: str, font) -> float:
        """Advance width of text in pixels."""
        if not text:
            return 0.0
        return float(font.getlength(text))

    def fill_text(self, text: str, x: float, y: float, font, color: str) -> None:
        """Draw text with its left edge and vertical middle at (x, y).

        Rotation and uniform scale come from the current transform.
        """
        if not text:
            return
        t = self._state.transform
        ax, ay = t.apply(x, y)
        theta = math.atan2(t.b, t.a)
        k = t.uniform_scale()

        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        left, top, right, bottom = probe.textbbox((0, 0), text, font=font, anchor="lm")
        reach = int(math.ceil(max(abs(left), abs(right), abs(top), abs(bottom)) * 1.5)) + 2

        tile = Image.new("RGBA", (2 * reach, 2 * reach), (0, 0, 0, 0))
        ImageDraw.Draw(tile).text((reach, reach), text, font=font,
                                  fill=to_rgba(color), anchor="lm")
        if abs(k - 1.0) > 1e-6:
            side = max(1, int(round(2 * reach * k)))
            tile = tile.resize((side, side), Image.Resampling.LANCZOS)
        if abs(theta) > 1e-9:
            # Pillow rotates counter-clockwise on screen, canvas angles run clockwise
            tile = tile.rotate(-math.degrees(theta), resample=Image.Resampling.BICUBIC,
                               expand=False)
        half = tile.width / 2
        self._composite(tile, (int(round(ax - half)), int(round(ay - half))))
