"""Tests for the Pillow drawing surface."""

import math

import numpy as np
import pytest
from PIL import Image, ImageFont

from ringframe.surface import (
    PillowSurface, ConicGradient, UnsupportedCapability, circle_coverage, ring_coverage,
)


def test_circle_coverage_inside_and_outside():
    cov = circle_coverage((20, 20), 10, 10, 5)
    assert cov[10, 10] == 1.0
    assert cov[0, 0] == 0.0


def test_ring_coverage_is_hollow():
    cov = ring_coverage((40, 40), 20, 20, 15, 4)
    assert cov[20, 20] == 0.0
    assert cov[20, 35] == 1.0


def test_save_restore_depth_and_transform(surface):
    surface.save()
    surface.translate(10, 5)
    assert surface.depth == 1
    assert surface.transform.apply(0, 0) == (10, 5)
    surface.restore()
    assert surface.depth == 0
    assert surface.transform.apply(0, 0) == (0, 0)
    surface.restore()
    assert surface.depth == 0


def test_clip_circle_masks_draw_image(surface):
    red = Image.new("RGBA", (50, 50), (255, 0, 0, 255))
    surface.clip_circle(100, 100, 50)
    surface.draw_image(red, 0, 0, 200, 200)
    px = surface.snapshot()
    assert px.getpixel((100, 100)) == (255, 0, 0, 255)
    assert px.getpixel((5, 5))[3] == 0
    assert px.getpixel((195, 100))[3] == 0


def test_reset_drops_clip(surface):
    surface.save()
    surface.clip_circle(100, 100, 10)
    surface.reset()
    surface.draw_image(Image.new("RGBA", (10, 10), (0, 255, 0, 255)), 0, 0, 200, 200)
    assert surface.snapshot().getpixel((2, 2)) == (0, 255, 0, 255)


def test_stroke_circle_solid(surface):
    surface.stroke_circle(100, 100, 60, 10, "#ff0000")
    px = surface.snapshot()
    assert px.getpixel((160, 100)) == (255, 0, 0, 255)
    assert px.getpixel((100, 100))[3] == 0
    assert px.getpixel((100, 100 - 75))[3] == 0


def test_stroke_circle_follows_transform(surface):
    surface.translate(50, 0)
    surface.stroke_circle(50, 100, 60, 10, "blue")
    assert surface.snapshot().getpixel((160, 100)) == (0, 0, 255, 255)


def test_conic_offsets_run_clockwise():
    grad = ConicGradient(start_angle=0.0, cx=0.0, cy=0.0)
    offs = grad.offsets_at(np.array([1.0, 0.0, -1.0]), np.array([0.0, 1.0, 1e-9]))
    assert offs == pytest.approx([0.0, 0.25, 0.5])


def test_conic_sample_interpolates_and_holds_ends():
    grad = ConicGradient(start_angle=0.0, cx=0.0, cy=0.0)
    grad.add_color_stop(0.5, "#ff0000")
    grad.add_color_stop(0, "rgba(255, 0, 0, 0)")
    grad.add_color_stop(2.0, "rgba(255, 0, 0, 0)")
    assert [s[0] for s in grad.stops] == [0.0, 0.5, 1.0]
    out = grad.sample(np.array([0.0, 0.25, 0.5, 0.75]))
    assert out[:, 3] == pytest.approx([0, 127.5, 255, 127.5])
    assert out[:, 0] == pytest.approx([255] * 4)


def test_conic_gradient_stroke(surface):
    grad = surface.create_conic_gradient(-math.pi / 2, 100, 100)
    grad.add_color_stop(0, "#00ff00")
    grad.add_color_stop(0.5, "#00ff00")
    grad.add_color_stop(0.5, "rgba(0, 255, 0, 0)")
    grad.add_color_stop(1, "rgba(0, 255, 0, 0)")
    surface.stroke_circle(100, 100, 60, 10, grad)
    px = surface.snapshot()
    # right half of the ring is painted, left half is transparent
    assert px.getpixel((160, 100)) == (0, 255, 0, 255)
    assert px.getpixel((39, 100))[3] == 0


def test_conic_unsupported():
    s = PillowSurface(50, conic_gradient=False)
    assert not s.capabilities.conic_gradient
    with pytest.raises(UnsupportedCapability):
        s.create_conic_gradient(0, 25, 25)


def test_measure_text():
    font = ImageFont.load_default(size=20)
    s = PillowSurface(50)
    assert s.measure_text("", font) == 0
    assert s.measure_text("AB", font) > s.measure_text("A", font) > 0


def test_fill_text_anchors_left_middle(surface):
    font = ImageFont.load_default(size=20)
    surface.fill_text("X", 100, 100, font, "black")
    bbox = surface.snapshot().getbbox()
    assert bbox is not None
    left, top, right, bottom = bbox
    assert 95 <= left <= 105
    assert top < 100 < bottom


def test_fill_text_rotated_quarter_turn(surface):
    font = ImageFont.load_default(size=20)
    surface.translate(100, 100)
    surface.rotate(math.pi / 2)
    surface.fill_text("XXX", 0, 0, font, "black")
    left, top, right, bottom = surface.snapshot().getbbox()
    # text now runs downwards from the anchor
    assert bottom - top > right - left
    assert top >= 95


def test_font_weights_and_candidates():
    from ringframe.fonts import is_bold, candidate_files

    assert is_bold("bold") and is_bold("700") and is_bold(600)
    assert not is_bold("normal") and not is_bold("400")
    names = candidate_files("Courier New", True)
    assert names[0] == "courbd.ttf"
    assert "DejaVuSans.ttf" in names
    assert candidate_files("Unknown Family", False)[0] == "DejaVuSans.ttf"


def test_resolve_font_is_cached():
    from ringframe.fonts import resolve_font
    from ringframe.types import TextStyle

    a = resolve_font(TextStyle(font_size=30))
    b = resolve_font(TextStyle(font_size=30.2))
    assert a is b
    assert a.getlength("A") > 0


def test_apply_transform_composes_with_current(surface):
    from ringframe.transforms import view_transform
    from ringframe.types import ViewParams

    surface.translate(5, 0)
    surface.apply_transform(view_transform(ViewParams(scale=2.0, offx=10, offy=0), 200))
    # canvas centre maps to centre + offset, then the earlier translate
    assert surface.transform.apply(100, 100) == pytest.approx((115, 100))
    assert surface.transform.uniform_scale() == pytest.approx(2.0)


def test_conic_stops_past_a_full_turn_collapse_to_the_end():
    grad = ConicGradient(start_angle=0.0, cx=0.0, cy=0.0)
    grad.add_color_stop(0, "rgba(0, 0, 0, 0)")
    grad.add_color_stop(0.6, "#000000")
    grad.add_color_stop(1.4, "#000000")
    grad.add_color_stop(2.0, "rgba(0, 0, 0, 0)")
    assert [s[0] for s in grad.stops] == [0.0, 0.6, 1.0, 1.0]
    out = grad.sample(np.array([0.3, 0.8, 0.999]))
    assert out[:, 3] == pytest.approx([127.5, 255, 255])
