"""Tests for affine transforms."""

import math

import pytest

from ringframe.transforms import Affine, view_transform, placement_transform
from ringframe.types import ViewParams


def test_chain_applies_last_operation_first():
    t = Affine.identity().translate(10, 0).scale(2)
    assert t.apply(1, 1) == pytest.approx((12, 2))


def test_rotation_is_clockwise_on_screen():
    t = Affine.rotation(math.pi / 2)
    assert t.apply(1, 0) == pytest.approx((0, 1))


def test_inverse_round_trip():
    t = Affine.identity().translate(30, -7).rotate(0.4).scale(1.7)
    x, y = t.apply(12.5, -3)
    assert t.inverse().apply(x, y) == pytest.approx((12.5, -3))
    ident = t.multiply(t.inverse())
    assert (ident.a, ident.b, ident.c, ident.d) == pytest.approx((1, 0, 0, 1))
    assert (ident.e, ident.f) == pytest.approx((0, 0), abs=1e-9)


def test_singular_inverse_raises():
    with pytest.raises(ZeroDivisionError):
        Affine.scaling(0).inverse()


def test_uniform_scale():
    assert Affine.identity().scale(3).rotate(1.0).uniform_scale() == pytest.approx(3)


def test_view_transform_zooms_about_centre():
    t = view_transform(ViewParams(scale=2.0, offx=10, offy=-20), 1000)
    assert t.apply(500, 500) == pytest.approx((510, 480))
    assert t.apply(600, 500) == pytest.approx((710, 480))


def test_placement_transform():
    t = placement_transform(200, 100, 10, 20, 400, 50)
    assert t.apply(0, 0) == pytest.approx((10, 20))
    assert t.apply(200, 100) == pytest.approx((410, 70))


def test_pil_affine_data_maps_output_to_input():
    t = Affine.translation(5, 7)
    a, b, c, d, e, f = t.pil_affine_data()
    # output pixel (5, 7) samples input (0, 0)
    assert (a * 5 + b * 7 + c, d * 5 + e * 7 + f) == pytest.approx((0, 0))
