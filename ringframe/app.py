"""Application - main loop orchestrator.

The Application class provides a clean, modular main loop that coordinates:
- Decode completions (via AsyncImageLoader)
- Input handling (via InputHandler and GestureMapper)
- Command execution
- Rendering on change (via RadialFrameRenderer)
- Presenting the rendered frame in the raylib window
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional
import traceback

from .state import EditorSession
from .renderer import RadialFrameRenderer
from .gestures import GestureMapper
from .input_handler import InputHandler, get_input_handler
from .loading import AsyncImageLoader, load_into_session
from .commands import Command, CloseApp
from .export import encode_png
from .rl_compat import (
    rl, RL_VERSION, init_window, load_texture_from_png, is_texture_valid,
    make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color,
    draw_text as RL_DrawText,
)
from .config import TARGET_FPS, WINDOW_SIZE, WINDOW_TITLE, BG_COLOR
from .logging import log, get_frame


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application()
        app.initialize(image_path)
        app.run()
    """

    session: EditorSession = field(default_factory=EditorSession)
    renderer: RadialFrameRenderer = field(default_factory=RadialFrameRenderer)
    input_handler: InputHandler = field(default_factory=get_input_handler)
    loader: Optional[AsyncImageLoader] = None
    running: bool = False
    window_size: int = WINDOW_SIZE

    _gestures: Optional[GestureMapper] = None
    _texture: Any = None

    @property
    def gestures(self) -> GestureMapper:
        if self._gestures is None:
            self._gestures = GestureMapper(self.session)
        return self._gestures

    def initialize(self, image_path: Optional[str] = None) -> bool:
        """Open the window and start decoding the first image."""
        log(f"[INIT] Creating window {self.window_size}x{self.window_size} ({RL_VERSION})")
        init_window(self.window_size, self.window_size, WINDOW_TITLE)
        try:
            rl.SetExitKey(0)
        except AttributeError:
            pass
        rl.SetTargetFPS(TARGET_FPS)

        self.input_handler.canvas_rect = (0.0, 0.0, float(self.window_size), float(self.window_size))
        self.loader = self.loader or AsyncImageLoader()
        if image_path:
            self.open_image(image_path)
        log("[APP] Application initialized")
        return True

    def open_image(self, path: str) -> None:
        if self.loader is None:
            self.loader = AsyncImageLoader()
        load_into_session(self.loader, self.session, path)

    def run(self) -> None:
        """Run the main loop until the window closes."""
        self.running = True
        log("[APP] Starting main loop")

        try:
            while self.running:
                self._frame()
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        """Execute a single frame."""
        if rl.WindowShouldClose():
            self.running = False
            return

        # 1. Decode completions
        if self.loader:
            self.loader.poll_ui_events()

        # 2. Gestures run immediately, keys come back as commands
        commands = self.input_handler.poll(self.session, self.gestures)
        for cmd in commands:
            self._execute_command(cmd)
            if not self.running:
                return

        # 3. Render on change and refresh the window texture
        if self.renderer.render_if_dirty(self.session):
            self._upload_frame()

        # 4. Present
        self._present()

    def _execute_command(self, cmd: Command) -> None:
        if isinstance(cmd, CloseApp):
            cmd.execute(self.session)
            self.running = False
            return
        cmd.execute(self.session)

    def _upload_frame(self) -> None:
        self._unload_texture()
        self._texture = load_texture_from_png(encode_png(self.session.pixels))

    def _unload_texture(self) -> None:
        if self._texture is not None and is_texture_valid(self._texture):
            rl.UnloadTexture(self._texture)
        self._texture = None

    def _present(self) -> None:
        rl.BeginDrawing()
        rl.ClearBackground(RL_Color(*BG_COLOR))
        if self._texture is not None and is_texture_valid(self._texture):
            size = self.session.canvas_size
            rl.DrawTexturePro(
                self._texture,
                RL_Rect(0, 0, size, size),
                RL_Rect(0, 0, self.window_size, self.window_size),
                RL_V2(0, 0), 0.0, RL_Color(255, 255, 255, 255),
            )
        elif not self.session.image_ready:
            RL_DrawText("Loading...", 20, 20, 24, RL_Color(90, 90, 90, 255))
        rl.EndDrawing()

    def _cleanup(self) -> None:
        """Clean up resources."""
        log("[APP] Starting cleanup")
        if self.loader:
            log("[APP] Shutting down async loader")
            self.loader.shutdown()
        self._unload_texture()
        log("[APP] Closing window")
        rl.CloseWindow()
        log(f"[APP] Cleanup complete, frames={get_frame()}")

    def stop(self) -> None:
        """Stop the main loop."""
        self.running = False
