"""Export of rendered frames to PNG."""

from __future__ import annotations
import io
import os

from PIL import Image

from .config import EXPORT_FILENAME
from .logging import log


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def save_png(image: Image.Image, path: str) -> str:
    """
    Save an image as PNG.

    Args:
        image: Rendered RGBA frame.
        path: Destination file. A directory gets the default file name.

    Returns:
        The path written.

    Raises:
        OSError: the file could not be written.
    """
    if os.path.isdir(path):
        path = os.path.join(path, EXPORT_FILENAME)
    with open(path, "wb") as f:
        f.write(encode_png(image))
    log(f"[EXPORT] Saved {image.width}x{image.height} frame: {os.path.basename(path)}")
    return path
