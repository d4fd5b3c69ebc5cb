"""Image utilities - validation and decoding of source photos."""

from __future__ import annotations
import os

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import IMG_EXTS, MAX_FILE_SIZE_MB, MAX_IMAGE_DIMENSION
from .types import RasterImage
from .logging import log


class ImageLoadError(RuntimeError):
    """The image could not be used as a frame source."""


def is_supported_image(filepath: str) -> bool:
    """Check if file has a supported image extension."""
    ext = os.path.splitext(filepath)[1].lower()
    return ext in IMG_EXTS


def get_file_size_mb(filepath: str) -> float:
    """Get file size in megabytes."""
    try:
        return os.path.getsize(filepath) / (1024 * 1024)
    except OSError:
        return 0.0


def is_file_too_large(filepath: str) -> bool:
    """Check if file exceeds maximum allowed size."""
    return get_file_size_mb(filepath) > MAX_FILE_SIZE_MB


def prepare_image(img: Image.Image, path: str = "") -> Image.Image:
    """Apply EXIF orientation, convert to RGBA and cap the dimensions."""
    img = ImageOps.exif_transpose(img)
    if img.mode != "RGBA":
        img = img.convert("RGBA")

    w, h = img.size
    if w > MAX_IMAGE_DIMENSION or h > MAX_IMAGE_DIMENSION:
        scale = min(MAX_IMAGE_DIMENSION / w, MAX_IMAGE_DIMENSION / h)
        new_w = max(1, int(w * scale))
        new_h = max(1, int(h * scale))
        log(f"[LOAD][RESIZE] {os.path.basename(path)}: {w}x{h} -> {new_w}x{new_h}")
        img = img.resize((new_w, new_h), Image.Resampling.LANCZOS)
    return img


def decode_raster(path: str) -> RasterImage:
    """Decode an image file fully into memory.

    Raises:
        ImageLoadError: unsupported extension, oversized or undecodable file.
    """
    if not is_supported_image(path):
        raise ImageLoadError(f"unsupported image type: {os.path.basename(path)}")
    if is_file_too_large(path):
        raise ImageLoadError(f"file too large: {get_file_size_mb(path):.1f}MB")

    try:
        with Image.open(path) as src:
            src.load()
            img = prepare_image(src, path)
    except (OSError, UnidentifiedImageError) as e:
        raise ImageLoadError(f"cannot decode {os.path.basename(path)}: {e}") from e

    if img.width <= 0 or img.height <= 0:
        raise ImageLoadError("empty image")
    return RasterImage.from_pil(img, path=path)
