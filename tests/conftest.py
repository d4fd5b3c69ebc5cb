"""Shared test fixtures."""

from __future__ import annotations

import pytest
from PIL import Image

from ringframe.types import RasterImage, FrameStyle, TextStyle
from ringframe.state import EditorSession
from ringframe.surface import PillowSurface


BLUE = (0, 0, 255, 255)
FRAME_GREEN = "#107038"


def make_raster(w: int = 400, h: int = 300, color=BLUE, path: str = "") -> RasterImage:
    return RasterImage.from_pil(Image.new("RGBA", (w, h), color), path=path)


def fixed_measure(width_per_char: float = 10.0):
    """Monospace measure: every character is the same width."""
    return lambda s: width_per_char * len(s)


@pytest.fixture
def raster() -> RasterImage:
    return make_raster()


@pytest.fixture
def session() -> EditorSession:
    return EditorSession()


@pytest.fixture
def loaded_session(raster) -> EditorSession:
    s = EditorSession(
        frame=FrameStyle(frame_color=FRAME_GREEN, frame_width=120, angle_deg=0),
        text=TextStyle(text="", text_color=FRAME_GREEN),
    )
    s.on_image_loaded(raster)
    return s


@pytest.fixture
def surface() -> PillowSurface:
    return PillowSurface(200)
