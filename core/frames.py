"""Frame identity lookup: which renderer frames are still alive."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from core.contracts import FrameInfo

L = logging.getLogger("media_arbiter.frames")


class FrameResolver(Protocol):
    def lookup_frame(self, process_id: int, frame_id: int) -> FrameInfo | None: ...


class FrameRegistry:
    """Thread-safe map of live frames keyed by (process id, frame id)."""

    def __init__(self):
        self._frames: dict[tuple[int, int], FrameInfo] = {}
        self._lock = threading.Lock()

    def register_frame(
        self, process_id: int, frame_id: int, url: str = ""
    ) -> FrameInfo:
        frame = FrameInfo(
            render_process_id=int(process_id), render_frame_id=int(frame_id), url=url
        )
        with self._lock:
            self._frames[(frame.render_process_id, frame.render_frame_id)] = frame
        L.debug("Frame registered %s:%s %s", process_id, frame_id, url)
        return frame

    def unregister_frame(self, process_id: int, frame_id: int) -> bool:
        with self._lock:
            removed = self._frames.pop((int(process_id), int(frame_id)), None)
        if removed is not None:
            L.debug("Frame unregistered %s:%s", process_id, frame_id)
        return removed is not None

    def lookup_frame(self, process_id: int, frame_id: int) -> FrameInfo | None:
        with self._lock:
            return self._frames.get((int(process_id), int(frame_id)))


__all__ = ["FrameResolver", "FrameRegistry"]
