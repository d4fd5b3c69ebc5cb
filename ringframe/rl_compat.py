"""raylib bindings glue - works with either raylibpy or python-raylib.

The editor only needs a window, input polling, one texture holding the
rendered frame and a status line of text. Struct values are created through
the binding's constructor when it has one, else through its cffi ``ffi``.
"""

from __future__ import annotations
import ctypes
from typing import Any, List, Tuple

try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except ImportError:
    import raylib as rl
    RL_VERSION = "python-raylib"


def _make_struct(name: str, **values: Any) -> Any:
    """Build a raylib struct by type name, e.g. ``_make_struct("Vector2", x=1, y=2)``."""
    ctor = getattr(rl, name, None)
    if ctor is not None:
        try:
            return ctor(*values.values())
        except TypeError:
            pass
    ptr = rl.ffi.new(f"{name} *")
    for key, value in values.items():
        setattr(ptr[0], key, value)
    return ptr[0]


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    return _make_struct("Rectangle", x=float(x), y=float(y), width=float(w), height=float(h))


def make_vec2(x: float, y: float) -> Any:
    return _make_struct("Vector2", x=float(x), y=float(y))


def make_color(r: int, g: int, b: int, a: int = 255) -> Any:
    return _make_struct("Color", r=int(r), g=int(g), b=int(b), a=int(a))


def _text_arg(text: str) -> Any:
    # python-raylib wants bytes for C strings, raylibpy takes str
    return text.encode("utf-8") if hasattr(rl, "ffi") else text


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    rl.DrawText(_text_arg(text), x, y, size, color)


def init_window(w: int, h: int, title: str) -> None:
    rl.InitWindow(w, h, _text_arg(title))


def load_texture_from_png(data: bytes) -> Any:
    """Upload PNG-encoded pixels as a GPU texture."""
    if hasattr(rl, "ffi"):
        buf = rl.ffi.from_buffer("unsigned char[]", data)
    else:
        buf = (ctypes.c_ubyte * len(data)).from_buffer_copy(data)
    img = rl.LoadImageFromMemory(_text_arg(".png"), buf, len(data))
    tex = rl.LoadTextureFromImage(img)
    rl.UnloadImage(img)
    return tex


def get_texture_id(tex: Any) -> int:
    """Safely get texture ID."""
    return getattr(tex, 'id', 0) or 0


def is_texture_valid(tex: Any) -> bool:
    """Check if texture is valid and loaded."""
    return get_texture_id(tex) > 0


def get_touch_points() -> List[Tuple[float, float]]:
    """Positions of all active touch points."""
    count = rl.GetTouchPointCount()
    points = []
    for i in range(count):
        p = rl.GetTouchPosition(i)
        points.append((p.x, p.y))
    return points


# Re-export commonly used raylib items
__all__ = [
    'rl',
    'RL_VERSION',
    'make_rect',
    'make_vec2',
    'make_color',
    'draw_text',
    'init_window',
    'load_texture_from_png',
    'get_texture_id',
    'is_texture_valid',
    'get_touch_points',
]
