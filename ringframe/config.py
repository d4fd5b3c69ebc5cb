"""Application configuration constants."""

from __future__ import annotations

# Canvas (fixed output size, logical pixels)
CANVAS_SIZE = 1000

# Zoom
MIN_SCALE = 0.3
MAX_SCALE = 5.0
ZOOM_STEP_SLIDER = 0.01
ZOOM_STEP_KEYS = 0.05
WHEEL_ZOOM_FACTOR = 0.001
PINCH_ZOOM_FACTOR = 0.005

# Browser-style wheel delta for one raylib wheel notch
WHEEL_DELTA_PER_NOTCH = 100.0

# Wheel zoom is computed but not applied unless enabled
WHEEL_ZOOM_ENABLED = False

# Ring fade around the text
FADE_ZONE = 0.25
FADE_PAD_DEG = 5.0

# Default frame style
DEFAULT_FRAME_COLOR = "#107038"
DEFAULT_FRAME_WIDTH = 120
DEFAULT_ANGLE_DEG = 120.0

# Default text style
DEFAULT_TEXT = "#OPENTOWORK"
DEFAULT_TEXT_COLOR = "#ffffff"
DEFAULT_TEXT_SIZE = 75
DEFAULT_FONT_FAMILY = "Courier New"
DEFAULT_FONT_WEIGHT = "700"

# Parameter ranges (controls panel)
FRAME_WIDTH_MIN = 20
FRAME_WIDTH_MAX = 200
TEXT_SIZE_MIN = 10
TEXT_SIZE_MAX = 200
ANGLE_MIN = 0
ANGLE_MAX = 360

FONT_FAMILIES = ("Segoe UI", "Arial", "Georgia", "Verdana", "Courier New")
FONT_WEIGHTS = ("normal", "bold", "100", "200", "300", "400",
                "500", "600", "700", "800", "900")

# Weights at or above this are drawn with the bold face
BOLD_WEIGHT_THRESHOLD = 600

# Font search directories (first match wins)
FONT_DIRS = (
    "C:\\Windows\\Fonts",
    "/Library/Fonts",
    "/System/Library/Fonts",
    "/usr/share/fonts/truetype/msttcorefonts",
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/TTF",
)

# Image limits
MAX_IMAGE_DIMENSION = 8192
MAX_FILE_SIZE_MB = 200

# Async decoding
ASYNC_WORKERS = 1
UI_EVENTS_PER_FRAME = 100

# Export
EXPORT_FILENAME = "framed-image.png"

# Window
TARGET_FPS = 60
WINDOW_SIZE = 800
WINDOW_TITLE = "Ring Frame Editor"
BG_COLOR = (249, 250, 251)

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_ZOOM_IN = 265           # KEY_UP
KEY_ZOOM_OUT = 264          # KEY_DOWN
KEY_ANGLE_UP = 262          # KEY_RIGHT
KEY_ANGLE_DOWN = 263        # KEY_LEFT
KEY_EXPORT = 83             # KEY_S
KEY_CLOSE = 256             # KEY_ESCAPE

# Supported image extensions
IMG_EXTS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tif", ".tiff"})
