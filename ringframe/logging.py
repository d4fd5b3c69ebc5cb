"""Logging with elapsed time and render-pass numbers.

Every line carries the seconds since start-up and the number of completed
render passes, e.g. ``[  1.234s F000042] [RENDER] ...``. Headless exports
can silence output with ``set_quiet(True)``.
"""

from __future__ import annotations
import sys
import time
from typing import Optional, TextIO


class Logger:
    """Process-wide logger.

    The frame counter is advanced by the renderer after each drawn frame,
    so a line can be matched to the render pass it followed.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._start_time: float = time.perf_counter()
        self._frame: int = 0
        self.stream = stream
        self.quiet = False

    @property
    def frame(self) -> int:
        return self._frame

    def increment_frame(self) -> None:
        self._frame += 1

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._start_time

    def format(self, msg: str) -> str:
        return f"[{self.elapsed:7.3f}s F{self._frame:06d}] {msg}\n"

    def log(self, msg: str) -> None:
        if self.quiet:
            return
        line = self.format(msg)
        for out in (self.stream or sys.stdout, sys.stderr):
            try:
                out.write(line)
                out.flush()
                return
            except (OSError, ValueError):
                continue


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    get_logger().log(msg)


def set_quiet(quiet: bool) -> None:
    get_logger().quiet = quiet


def get_frame() -> int:
    return get_logger().frame


def increment_frame() -> None:
    get_logger().increment_frame()
