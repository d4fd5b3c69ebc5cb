"""Renderer - composes the framed profile picture.

The Renderer only reads session state and draws into the session's surface.
Per frame: clear, clip to the outer edge of the ring, draw the photo under
the pan/zoom transform, stroke the fading ring, then draw the text glyph by
glyph along the ring centre line.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .state import EditorSession

from .arc_text import layout_arc_text, glyph_position
from .colors import color_with_alpha
from .fonts import resolve_font
from .surface import PillowSurface
from .transforms import view_transform
from .types import ArcLayout, FrameStyle, TextStyle, RasterImage, ViewParams
from .view_math import fit_scale
from .logging import log, increment_frame


@dataclass
class RadialFrameRenderer:
    """
    Draws one frame per call.

    Usage:
        renderer = RadialFrameRenderer()
        if renderer.render_if_dirty(session):
            export(session.pixels)
    """
    last_layout: Optional[ArcLayout] = None

    def render_if_dirty(self, session: "EditorSession") -> bool:
        """Consume the dirty flag and redraw. Returns True if a frame was drawn."""
        if not session.consume_dirty():
            return False
        return self.draw_frame(session)

    def draw_frame(self, session: "EditorSession") -> bool:
        """Render the session. Returns False (leaving the canvas untouched)
        while the image is missing or still decoding."""
        if not session.image_ready:
            return False
        drawn = self.draw(session.surface, session.view, session.frame,
                          session.text, session.raster,
                          conic=session.capabilities.conic_gradient)
        if drawn:
            session.has_frame = True
        return drawn

    def draw(self, surface: PillowSurface, view: ViewParams, frame: FrameStyle,
             text: TextStyle, raster: Optional[RasterImage], conic: bool = True) -> bool:
        """Draw a full frame onto the surface."""
        if raster is None or not raster.is_ready:
            return False

        S = surface.size
        cx = cy = S / 2
        radius = cx - frame.frame_width

        surface.reset()
        surface.clear()

        surface.save()
        surface.clip_circle(cx, cy, radius + frame.frame_width)

        self._draw_image(surface, view, raster, cx, cy)

        r_frame = radius + frame.frame_width / 2
        font = resolve_font(text)
        layout = layout_arc_text(
            text.text,
            lambda s: surface.measure_text(s, font),
            frame.angle_deg,
            r_frame,
            fade_zone=frame.fade_zone,
            fade_pad_deg=frame.fade_pad_deg,
        )
        self.last_layout = layout

        if conic:
            self._draw_ring(surface, frame, layout, cx, cy)

        if text.text and layout.glyphs:
            self._draw_text(surface, text, layout, font, cx, cy)

        surface.restore()
        increment_frame()
        log(f"[RENDER] scale={view.scale:.2f} off=({view.offx:.1f},{view.offy:.1f}) "
            f"glyphs={len(layout.glyphs)} conic={conic}")
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Layers
    # ═══════════════════════════════════════════════════════════════════════

    def _draw_image(self, surface: PillowSurface, view: ViewParams,
                    raster: RasterImage, cx: float, cy: float) -> None:
        """Photo scaled so its smaller side fills the canvas, then panned/zoomed."""
        surface.save()
        surface.apply_transform(view_transform(view, surface.size))

        k = fit_scale(raster.natural_width, raster.natural_height, surface.size)
        w = raster.natural_width * k
        h = raster.natural_height * k
        surface.draw_image(raster.image, cx - w / 2, cy - h / 2, w, h)
        surface.restore()

    def _draw_ring(self, surface: PillowSurface, frame: FrameStyle,
                   layout: ArcLayout, cx: float, cy: float) -> None:
        """Ring that is opaque behind the text and fades out on both sides."""
        fade, span = layout.fade_ang, layout.text_ang_len
        full = 2 * math.pi
        grad = surface.create_conic_gradient(layout.start_ang, cx, cy)
        grad.add_color_stop(0, color_with_alpha(frame.frame_color, 0))
        grad.add_color_stop(fade / full, frame.frame_color)
        grad.add_color_stop((fade + span) / full, frame.frame_color)
        grad.add_color_stop((2 * fade + span) / full, color_with_alpha(frame.frame_color, 0))
        surface.stroke_circle(cx, cy, layout.r_frame, frame.frame_width, grad)

    def _draw_text(self, surface: PillowSurface, text: TextStyle, layout: ArcLayout,
                   font, cx: float, cy: float) -> None:
        for glyph in layout.glyphs:
            x, y, rot = glyph_position(glyph, cx, cy, layout.r_frame)
            surface.save()
            surface.translate(x, y)
            surface.rotate(rot)
            surface.fill_text(glyph.char, 0, 0, font, text.text_color)
            surface.restore()
