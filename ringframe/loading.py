"""Async image loading - decodes on worker threads, completes on the UI thread.

Decoding is the only asynchronous step. Workers push completions into a
UI event queue; the main loop drains it with poll_ui_events(), so session
state is only ever touched from one thread.
"""

from __future__ import annotations
from collections import deque
from queue import Queue, Empty
from threading import Thread, Lock
from typing import TYPE_CHECKING, Callable, Deque, List, Optional, Tuple

if TYPE_CHECKING:
    from .state import EditorSession

from .types import UIEvent, RasterImage
from .image_utils import decode_raster
from .config import ASYNC_WORKERS, UI_EVENTS_PER_FRAME
from .logging import log

LoadCallback = Callable[[str, Optional[RasterImage], Optional[Exception]], None]


class AsyncImageLoader:
    def __init__(self, loader_func: Callable[[str], RasterImage] = decode_raster,
                 workers: int = ASYNC_WORKERS):
        self.task_queue: "Queue[Tuple[str, LoadCallback]]" = Queue()
        self.loader_func = loader_func
        self.running = True
        self.ui_events: Deque[UIEvent] = deque()
        self.ui_lock = Lock()
        self.workers: List[Thread] = []

        for _ in range(max(1, workers)):
            worker = Thread(target=self._worker_loop, daemon=True)
            worker.start()
            self.workers.append(worker)

    def _worker_loop(self):
        while self.running:
            try:
                path, callback = self.task_queue.get(timeout=0.1)
            except Empty:
                continue

            result = None
            error = None

            try:
                result = self.loader_func(path)
            except Exception as e:
                error = e

            self._push_ui_event(callback, (path, result, error))
            self.task_queue.task_done()

    def _push_ui_event(self, callback: Callable, args: tuple):
        with self.ui_lock:
            self.ui_events.append(UIEvent(callback, args))

    @property
    def pending_events(self) -> int:
        with self.ui_lock:
            return len(self.ui_events)

    def poll_ui_events(self, max_events: int = UI_EVENTS_PER_FRAME) -> int:
        """Run queued completion callbacks on the calling thread."""
        events_to_process = []
        with self.ui_lock:
            while self.ui_events and len(events_to_process) < max_events:
                events_to_process.append(self.ui_events.popleft())

        for event in events_to_process:
            try:
                event.callback(*event.args)
            except Exception as e:
                log(f"[UI_EVENT][ERR] {e!r}")
        return len(events_to_process)

    def submit(self, path: str, callback: LoadCallback):
        self.task_queue.put((path, callback))

    def wait_idle(self) -> None:
        """Block until every submitted task has finished decoding."""
        self.task_queue.join()

    def shutdown(self):
        self.running = False
        for worker in self.workers:
            worker.join(timeout=1.0)


def load_into_session(loader: AsyncImageLoader, session: "EditorSession", path: str) -> None:
    """Start decoding path and hand the result to the session when done."""
    session.begin_image_load(path)

    def on_loaded(p: str, raster: Optional[RasterImage], error: Optional[Exception]):
        if error is not None or raster is None:
            session.on_image_failed(p, error or RuntimeError("no image"))
            return
        session.on_image_loaded(raster)

    loader.submit(path, on_loaded)
