"""Tests for the editor session, gestures and commands."""

import os

import pytest

from ringframe.commands import (
    SetZoom, UpdateStyle, ExportFrame, CloseApp, WheelZoom, PinchZoom, EndPinch,
)
from ringframe.gestures import GestureMapper
from ringframe.image_utils import ImageLoadError
from ringframe.loading import AsyncImageLoader, load_into_session
from ringframe.renderer import RadialFrameRenderer
from ringframe.types import Point2D

from conftest import make_raster


# ═══════════════════════════════════════════════════════════════════════════
# Session
# ═══════════════════════════════════════════════════════════════════════════

def test_observers_are_notified(session):
    seen = []
    session.subscribe(seen.append)
    session.subscribe(seen.append)
    session.update_frame_style(angle_deg=10)
    assert seen == [session]
    session.unsubscribe(seen.append)
    session.update_frame_style(angle_deg=20)
    assert len(seen) == 1


def test_unchanged_style_is_not_dirty(session):
    session.consume_dirty()
    session.update_text_style(text=session.text.text)
    assert not session.dirty


def test_update_styles_routes_fields(session):
    session.update_styles(frame_color="red", text="HI", font_size=40)
    assert session.frame.frame_color == "red"
    assert session.text.text == "HI"
    assert session.text.font_size == 40


def test_update_styles_rejects_unknown_fields(session):
    with pytest.raises(TypeError):
        session.update_styles(colour="red")


def test_frame_width_reclamps_offset(session):
    session.pan(Point2D(120, 0))
    session.update_frame_style(frame_width=60)
    assert session.view.offx == 60


def test_pan_at_limit_is_not_dirty(session):
    session.pan(Point2D(500, 0))
    session.consume_dirty()
    session.pan(Point2D(10, 0))
    assert not session.dirty


def test_load_resets_view(session):
    session.set_zoom(2.0)
    session.pan(Point2D(100, 50))
    session.consume_dirty()
    session.on_image_loaded(make_raster())
    assert session.view.scale == 1.0
    assert session.view.offset == Point2D(0, 0)
    assert session.dirty
    assert session.image_ready


def test_stale_load_is_ignored(session):
    session.begin_image_load("b.png")
    assert not session.image_ready
    session.on_image_loaded(make_raster(path="a.png"))
    assert not session.image_ready
    session.on_image_loaded(make_raster(path="b.png"))
    assert session.image_ready


def test_failed_load_keeps_previous_image_editable(session):
    def fail(path):
        raise ImageLoadError("broken")

    raster = make_raster(path="a.png")
    session.on_image_loaded(raster)
    loader = AsyncImageLoader(loader_func=fail)
    try:
        load_into_session(loader, session, "b.png")
        assert session.is_loading
        loader.wait_idle()
        loader.poll_ui_events()
    finally:
        loader.shutdown()

    assert not session.is_loading
    assert session.raster is raster
    assert session.image_ready
    session.update_frame_style(angle_deg=10)
    assert RadialFrameRenderer().render_if_dirty(session)


def test_load_after_completed_load_is_adopted(session):
    session.on_image_loaded(make_raster(path="a.png"))
    session.begin_image_load("c.png")
    session.on_image_loaded(make_raster(path="c.png"))
    assert session.raster.path == "c.png"
    assert not session.is_loading


def test_surface_defines_canvas_size(session):
    assert session.canvas_size == 1000
    assert session.view_state.canvas_size == 1000
    assert session.capabilities.conic_gradient


# ═══════════════════════════════════════════════════════════════════════════
# Gestures
# ═══════════════════════════════════════════════════════════════════════════

def test_drag_pans_by_pointer_movement(session):
    g = GestureMapper(session)
    g.pointer_down(0, 0)
    g.pointer_move(50, -30)
    assert session.view.offset == Point2D(50, -30)
    g.pointer_move(500, 500)
    assert session.view.offset == Point2D(120, 120)
    g.pointer_up()
    assert not g.pointer_move(0, 0)
    assert session.view.offset == Point2D(120, 120)


def test_secondary_button_does_not_drag(session):
    g = GestureMapper(session)
    assert not g.pointer_down(0, 0, primary=False)
    assert not g.pointer_move(10, 10)
    assert session.view.offset == Point2D(0, 0)


def test_pointer_leave_ends_drag(session):
    g = GestureMapper(session)
    g.pointer_down(0, 0)
    assert g.pointer_leave()
    assert not g.is_dragging


def test_wheel_does_not_zoom_but_reclamps(session):
    g = GestureMapper(session)
    session.view.offx = 999
    assert not g.wheel(-100)
    assert session.view.scale == 1.0
    assert session.view.offx == 120


def test_wheel_zoom_when_enabled(session):
    g = GestureMapper(session, wheel_zoom=True)
    assert g.wheel(-100)
    assert session.view.scale == pytest.approx(1.1)
    assert isinstance(g.last_command, WheelZoom)


def test_pinch_zooms_by_distance_change(session):
    g = GestureMapper(session)
    assert not g.touch_move([(0, 0), (100, 0)])
    assert session.view.scale == 1.0
    assert g.touch_move([(0, 0), (150, 0)])
    assert session.view.scale == pytest.approx(1.25)


def test_pinch_baseline_resets_after_touch_end(session):
    g = GestureMapper(session)
    g.touch_move([(0, 0), (100, 0)])
    assert g.touch_end()
    assert not g.touch_move([(0, 0), (300, 0)])
    assert session.view.scale == 1.0


def test_pinch_needs_exactly_two_touches(session):
    g = GestureMapper(session)
    assert not g.touch_move([(0, 0)])
    assert not g.touch_move([(0, 0), (1, 1), (2, 2)])
    assert not session.input.is_pinching


def test_pinch_out_reclamps(session):
    session.set_zoom(2.0)
    session.pan(Point2D(600, 0))
    session.input.advance_pinch(400)
    PinchZoom(200).execute(session)
    assert session.view.scale == pytest.approx(1.0)
    assert session.view.offx == 120


# ═══════════════════════════════════════════════════════════════════════════
# Commands
# ═══════════════════════════════════════════════════════════════════════════

def test_set_zoom_is_clamped(session):
    assert SetZoom(9.0).execute(session)
    assert session.view.scale == 5.0
    assert not SetZoom(5.0).execute(session)


def test_update_style_command(session):
    assert UpdateStyle({"angle_deg": 200}).execute(session)
    assert session.frame.angle_deg == 200
    assert not UpdateStyle({"angle_deg": 200}).execute(session)
    assert not UpdateStyle({}).execute(session)


def test_end_pinch_reports_state(session):
    assert not EndPinch().execute(session)
    session.input.advance_pinch(10)
    assert EndPinch().execute(session)


def test_export_needs_a_rendered_frame(session, tmp_path):
    out = tmp_path / "out.png"
    assert not ExportFrame(str(out)).execute(session)
    assert not out.exists()


def test_export_writes_png(loaded_session, tmp_path):
    RadialFrameRenderer().render_if_dirty(loaded_session)
    assert ExportFrame(str(tmp_path)).execute(loaded_session)
    assert os.path.exists(tmp_path / "framed-image.png")


def test_export_error_is_reported(loaded_session, tmp_path):
    RadialFrameRenderer().render_if_dirty(loaded_session)
    assert not ExportFrame(str(tmp_path / "missing" / "x.png")).execute(loaded_session)


def test_close_app(session):
    assert CloseApp().execute(session)
