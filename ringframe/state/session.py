"""Editor session - everything one frame editor instance needs to render."""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Callable, List, Optional

from .view import ViewState
from .input import InputState
from ..types import FrameStyle, TextStyle, RasterImage, Point2D, ViewParams
from ..surface import PillowSurface, SurfaceCapabilities
from ..logging import log

Observer = Callable[["EditorSession"], None]


@dataclass
class EditorSession:
    """
    Explicit editing context passed to the renderer and gesture mapper.

    Any change to styles, view or image marks the session dirty and notifies
    observers; a render step consumes the dirty flag and redraws once.

    Usage:
        session = EditorSession()
        session.on_image_loaded(RasterImage.from_pil(img))
        session.pan(Point2D(10, 0))
        renderer.render_if_dirty(session)
    """
    frame: FrameStyle = field(default_factory=FrameStyle)
    text: TextStyle = field(default_factory=TextStyle)
    view_state: ViewState = field(default_factory=ViewState)
    input: InputState = field(default_factory=InputState)
    surface: PillowSurface = field(default_factory=PillowSurface)
    raster: Optional[RasterImage] = None
    dirty: bool = True
    has_frame: bool = False  # surface holds at least one completed render
    pending_path: Optional[str] = None  # latest requested, not yet decoded
    _observers: List[Observer] = field(default_factory=list, repr=False)

    def __post_init__(self):
        # Capabilities are detected once per session
        self.capabilities: SurfaceCapabilities = self.surface.capabilities
        self.view_state.canvas_size = self.surface.size
        self.view_state.set_frame_width(self.frame.frame_width)

    # ═══════════════════════════════════════════════════════════════════════
    # Change tracking
    # ═══════════════════════════════════════════════════════════════════════

    def subscribe(self, fn: Observer) -> None:
        if fn not in self._observers:
            self._observers.append(fn)

    def unsubscribe(self, fn: Observer) -> None:
        if fn in self._observers:
            self._observers.remove(fn)

    def mark_dirty(self) -> None:
        self.dirty = True
        for fn in list(self._observers):
            fn(self)

    def consume_dirty(self) -> bool:
        """Return whether a redraw is due and clear the flag."""
        was_dirty = self.dirty
        self.dirty = False
        return was_dirty

    # ═══════════════════════════════════════════════════════════════════════
    # View
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def view(self) -> ViewParams:
        return self.view_state.view

    @property
    def canvas_size(self) -> int:
        return self.surface.size

    def _commit_view(self, before: ViewParams) -> bool:
        changed = self.view_state.view != before
        if changed:
            self.mark_dirty()
        return changed

    def pan(self, delta: Point2D) -> Point2D:
        before = self.view_state.snapshot()
        off = self.view_state.apply_pan(delta)
        self._commit_view(before)
        return off

    def zoom_by(self, delta: float) -> float:
        before = self.view_state.snapshot()
        scale = self.view_state.apply_zoom_delta(delta)
        self._commit_view(before)
        return scale

    def set_zoom(self, scale: float) -> float:
        before = self.view_state.snapshot()
        s = self.view_state.set_scale(scale)
        self._commit_view(before)
        return s

    def reclamp(self) -> Point2D:
        before = self.view_state.snapshot()
        off = self.view_state.reclamp()
        self._commit_view(before)
        return off

    # ═══════════════════════════════════════════════════════════════════════
    # Styles (parameter provider seam)
    # ═══════════════════════════════════════════════════════════════════════

    def update_frame_style(self, **changes) -> FrameStyle:
        """Replace FrameStyle fields. Unknown names raise TypeError."""
        new = replace(self.frame, **changes)
        if new != self.frame:
            self.frame = new
            self.view_state.set_frame_width(new.frame_width)
            self.mark_dirty()
        return self.frame

    def update_text_style(self, **changes) -> TextStyle:
        """Replace TextStyle fields. Unknown names raise TypeError."""
        new = replace(self.text, **changes)
        if new != self.text:
            self.text = new
            self.mark_dirty()
        return self.text

    def update_styles(self, **changes) -> None:
        """Route keyword changes to FrameStyle or TextStyle by field name."""
        frame_names = {f.name for f in fields(FrameStyle)}
        text_names = {f.name for f in fields(TextStyle)}
        unknown = set(changes) - frame_names - text_names
        if unknown:
            raise TypeError(f"unknown style fields: {sorted(unknown)}")
        frame_changes = {k: v for k, v in changes.items() if k in frame_names}
        text_changes = {k: v for k, v in changes.items() if k in text_names}
        if frame_changes:
            self.update_frame_style(**frame_changes)
        if text_changes:
            self.update_text_style(**text_changes)

    # ═══════════════════════════════════════════════════════════════════════
    # Image source
    # ═══════════════════════════════════════════════════════════════════════

    def begin_image_load(self, path: str) -> None:
        """A new image was requested. The current image stays until it decodes."""
        log(f"[LOAD] Requested {path}")
        self.pending_path = path

    def on_image_loaded(self, raster: RasterImage) -> None:
        """Decode finished: adopt the raster and reset pan/zoom.

        Completions for anything but the latest request are dropped.
        """
        if self.pending_path is not None and raster.path != self.pending_path:
            log(f"[LOAD] Ignoring stale image {raster.path}")
            return
        self.pending_path = None
        self.raster = raster
        self.view_state.reset()
        log(f"[LOAD] Loaded {raster.path or '<memory>'} "
            f"{raster.natural_width}x{raster.natural_height}")
        self.mark_dirty()

    def on_image_failed(self, path: str, error: Exception) -> None:
        """Decode failed: keep the current image and stay editable."""
        log(f"[LOAD][ERR] {path}: {error!r}")
        if path == self.pending_path:
            self.pending_path = None

    @property
    def is_loading(self) -> bool:
        return self.pending_path is not None

    @property
    def image_ready(self) -> bool:
        return self.raster is not None and self.raster.is_ready

    # ═══════════════════════════════════════════════════════════════════════
    # Output
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def pixels(self):
        """Copy of the rendered RGBA buffer for export."""
        return self.surface.snapshot()
