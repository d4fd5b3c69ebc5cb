"""Tests for decoding, async loading, export and the headless CLI."""

from PIL import Image
import pytest

from ringframe.image_utils import (
    ImageLoadError, decode_raster, is_supported_image, prepare_image,
)
from ringframe.loading import AsyncImageLoader, load_into_session
from ringframe.export import encode_png, save_png
from ringframe.config import MAX_IMAGE_DIMENSION
from ringframe.logging import set_quiet
import ringframe_editor

from conftest import make_raster


@pytest.fixture
def photo(tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (64, 48), (200, 10, 10)).save(path)
    return str(path)


def test_is_supported_image():
    assert is_supported_image("a.PNG")
    assert is_supported_image("dir/b.jpeg")
    assert not is_supported_image("notes.txt")


def test_decode_raster(photo):
    raster = decode_raster(photo)
    assert raster.is_ready
    assert raster.image.mode == "RGBA"
    assert (raster.natural_width, raster.natural_height) == (64, 48)
    assert raster.path == photo


def test_decode_rejects_unsupported(tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("hello")
    with pytest.raises(ImageLoadError):
        decode_raster(str(path))


def test_decode_rejects_oversized_file(photo, monkeypatch):
    monkeypatch.setattr("ringframe.image_utils.MAX_FILE_SIZE_MB", 0)
    with pytest.raises(ImageLoadError, match="too large"):
        decode_raster(photo)


def test_decode_rejects_corrupt(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not a png")
    with pytest.raises(ImageLoadError):
        decode_raster(str(path))


def test_prepare_image_caps_dimensions():
    img = prepare_image(Image.new("L", (MAX_IMAGE_DIMENSION * 2, 10)))
    assert img.mode == "RGBA"
    assert img.width == MAX_IMAGE_DIMENSION
    assert img.height == 5


def test_loader_completes_on_polling_thread(session):
    loader = AsyncImageLoader(loader_func=lambda p: make_raster(path=p))
    try:
        load_into_session(loader, session, "a.png")
        loader.wait_idle()
        assert not session.image_ready
        assert loader.pending_events == 1
        assert loader.poll_ui_events() == 1
        assert session.image_ready
        assert session.raster.path == "a.png"
    finally:
        loader.shutdown()


def test_loader_failure_keeps_session_empty(session):
    def fail(path):
        raise ImageLoadError("broken")

    loader = AsyncImageLoader(loader_func=fail)
    try:
        load_into_session(loader, session, "a.png")
        loader.wait_idle()
        loader.poll_ui_events()
        assert not session.image_ready
    finally:
        loader.shutdown()


def test_loader_keeps_latest_request(session):
    loader = AsyncImageLoader(loader_func=lambda p: make_raster(path=p))
    try:
        load_into_session(loader, session, "a.png")
        load_into_session(loader, session, "b.png")
        loader.wait_idle()
        loader.poll_ui_events()
        assert session.raster.path == "b.png"
    finally:
        loader.shutdown()


def test_encode_png_signature():
    data = encode_png(Image.new("RGBA", (4, 4)))
    assert data.startswith(b"\x89PNG\r\n\x1a\n")


def test_save_png_into_directory(tmp_path):
    path = save_png(Image.new("RGBA", (4, 4)), str(tmp_path))
    assert path.endswith("framed-image.png")
    with Image.open(path) as img:
        assert img.size == (4, 4)


def test_save_png_error_propagates(tmp_path):
    with pytest.raises(OSError):
        save_png(Image.new("RGBA", (4, 4)), str(tmp_path / "missing" / "x.png"))


def test_cli_export(photo, tmp_path):
    out = tmp_path / "framed.png"
    try:
        code = ringframe_editor.main([photo, "--export", str(out), "--text", "HI",
                                      "--frame-width", "999", "--no-conic", "-q"])
    finally:
        set_quiet(False)
    assert code == 0
    with Image.open(out) as img:
        assert img.size == (1000, 1000)
        assert img.mode == "RGBA"


def test_cli_clamps_style_values():
    args = ringframe_editor.build_parser().parse_args(
        ["--frame-width", "999", "--angle", "-5", "--text-size", "1"])
    session = ringframe_editor.session_from_args(args)
    assert session.frame.frame_width == 200
    assert session.frame.angle_deg == 0
    assert session.text.font_size == 10


def test_cli_missing_image(tmp_path):
    assert ringframe_editor.main([str(tmp_path / "none.png"), "--export", "x.png"]) == 2
