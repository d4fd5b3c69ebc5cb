"""ringframe - circular profile-picture frame editor."""
from __future__ import annotations
import argparse
import os
import sys
import traceback
from typing import List, Optional

from ringframe.config import (
    DEFAULT_FRAME_COLOR, DEFAULT_FRAME_WIDTH, DEFAULT_ANGLE_DEG,
    DEFAULT_TEXT, DEFAULT_TEXT_COLOR, DEFAULT_TEXT_SIZE,
    DEFAULT_FONT_FAMILY, DEFAULT_FONT_WEIGHT, FONT_WEIGHTS,
    FRAME_WIDTH_MIN, FRAME_WIDTH_MAX, TEXT_SIZE_MIN, TEXT_SIZE_MAX,
    ANGLE_MIN, ANGLE_MAX, CANVAS_SIZE,
)
from ringframe.math_utils import clamp
from ringframe.types import FrameStyle, TextStyle, Point2D
from ringframe.state import EditorSession
from ringframe.surface import PillowSurface
from ringframe.renderer import RadialFrameRenderer
from ringframe.image_utils import decode_raster, ImageLoadError
from ringframe.export import save_png
from ringframe.logging import log, set_quiet


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ringframe", description=__doc__)
    p.add_argument("image", nargs="?", help="photo to frame")
    p.add_argument("--text", default=DEFAULT_TEXT)
    p.add_argument("--text-color", default=DEFAULT_TEXT_COLOR)
    p.add_argument("--text-size", type=float, default=DEFAULT_TEXT_SIZE)
    p.add_argument("--font", default=DEFAULT_FONT_FAMILY)
    p.add_argument("--weight", default=DEFAULT_FONT_WEIGHT, choices=FONT_WEIGHTS)
    p.add_argument("--frame-color", default=DEFAULT_FRAME_COLOR)
    p.add_argument("--frame-width", type=float, default=DEFAULT_FRAME_WIDTH)
    p.add_argument("--angle", type=float, default=DEFAULT_ANGLE_DEG)
    p.add_argument("--zoom", type=float, default=1.0, help="initial zoom (with --export)")
    p.add_argument("--offset", type=float, nargs=2, metavar=("X", "Y"), default=(0.0, 0.0),
                   help="pan offset (with --export)")
    p.add_argument("--no-conic", action="store_true",
                   help="render without the fading ring gradient")
    p.add_argument("--export", metavar="PNG",
                   help="render once without a window and write the PNG")
    p.add_argument("-q", "--quiet", action="store_true", help="no log output")
    return p


def session_from_args(args: argparse.Namespace) -> EditorSession:
    """Build a session, keeping style values inside the editor's ranges."""
    frame = FrameStyle(
        frame_color=args.frame_color,
        frame_width=clamp(args.frame_width, FRAME_WIDTH_MIN, FRAME_WIDTH_MAX),
        angle_deg=clamp(args.angle, ANGLE_MIN, ANGLE_MAX),
    )
    text = TextStyle(
        text=args.text,
        text_color=args.text_color,
        font_family=args.font,
        font_weight=args.weight,
        font_size=clamp(args.text_size, TEXT_SIZE_MIN, TEXT_SIZE_MAX),
    )
    surface = PillowSurface(CANVAS_SIZE, conic_gradient=not args.no_conic)
    return EditorSession(frame=frame, text=text, surface=surface)


def export_headless(args: argparse.Namespace) -> int:
    """Decode, render one frame and save it. Returns a process exit code."""
    session = session_from_args(args)
    try:
        raster = decode_raster(os.path.abspath(args.image))
    except ImageLoadError as e:
        log(f"[EXPORT][ERR] {e}")
        return 1
    session.on_image_loaded(raster)
    session.set_zoom(args.zoom)
    session.pan(Point2D(*args.offset))

    if not RadialFrameRenderer().render_if_dirty(session):
        log("[EXPORT][ERR] Nothing rendered")
        return 1
    try:
        save_png(session.pixels, args.export)
    except OSError as e:
        log(f"[EXPORT][ERR] {e!r}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_quiet(args.quiet)
    log("[MAIN] Starting application")

    if args.image and not os.path.exists(args.image):
        log(f"[ARGS] Image not found: {args.image}")
        return 2

    if args.export:
        if not args.image:
            log("[ARGS] --export needs an image")
            return 2
        return export_headless(args)

    from ringframe.app import Application

    app = Application(session=session_from_args(args))
    try:
        app.initialize(os.path.abspath(args.image) if args.image else None)
    except Exception as e:
        log(f"[INIT][CRITICAL] Failed to initialize window: {e!r}")
        log(f"[INIT][CRITICAL] Traceback:\n{traceback.format_exc()}")
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
