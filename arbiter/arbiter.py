"""RequestArbiter: decides how one capture request gets resolved."""

from __future__ import annotations

import logging
from enum import Enum

from arbiter.screen import ScreenCaptureResolver
from arbiter.selector import DeviceSelector
from catalog.base import DeviceCatalog
from consent.base import BaseConsentAuthority
from core.callback import CallbackGuard, ResolutionCallback, ResolutionFn
from core.contracts import CaptureRequest, MediaStreamType, RequestType, ResultCode
from core.frames import FrameResolver

L = logging.getLogger("media_arbiter.arbiter")


class ArbiterState(str, Enum):
    PENDING = "PENDING"
    DELEGATED_TO_SCREEN_RESOLVER = "DELEGATED_TO_SCREEN_RESOLVER"
    OFFERED_TO_CONSENT = "OFFERED_TO_CONSENT"
    DELEGATED_TO_CONSENT = "DELEGATED_TO_CONSENT"
    DECIDING = "DECIDING"
    RESOLVED = "RESOLVED"
    ABANDONED_NO_FRAME = "ABANDONED_NO_FRAME"


class RequestArbiter:
    """Owns one request and its callback until exactly one path resolves it.

    Releasing the arbiter (`close`, leaving a `with` block, or garbage
    collection) while the callback is still held resolves it with
    FAILED_DUE_TO_SHUTDOWN.
    """

    def __init__(
        self,
        request: CaptureRequest,
        callback: ResolutionCallback | ResolutionFn,
        *,
        catalog: DeviceCatalog,
        frames: FrameResolver,
        consent: BaseConsentAuthority,
        screen_resolver: ScreenCaptureResolver | None = None,
    ):
        self.request = request
        self._guard = CallbackGuard(callback)
        self.catalog = catalog
        self.frames = frames
        self.consent = consent
        self.selector = DeviceSelector(catalog)
        self.screen_resolver = screen_resolver or ScreenCaptureResolver()
        self.state = ArbiterState.PENDING
        # Pepper opens ask for both so the user sees a single prompt.
        pepper = request.request_type == RequestType.OPEN_DEVICE_PEPPER_ONLY
        self.microphone_requested = (
            request.audio_type == MediaStreamType.DEVICE_AUDIO_CAPTURE or pepper
        )
        self.webcam_requested = (
            request.video_type == MediaStreamType.DEVICE_VIDEO_CAPTURE or pepper
        )

    @property
    def callback_held(self) -> bool:
        return self._guard.held

    def run(self) -> ArbiterState:
        if self.state is not ArbiterState.PENDING:
            raise RuntimeError(f"arbiter already ran (state={self.state.value})")
        req = self.request

        if req.is_screen_capture:
            self.state = ArbiterState.DELEGATED_TO_SCREEN_RESOLVER
            devices, result = self.screen_resolver.resolve(req)
            L.debug("Screen capture request -> %d device(s)", len(devices))
            self._resolve(devices, result)
            return self.state

        frame = self.frames.lookup_frame(req.render_process_id, req.render_frame_id)
        if frame is None:
            L.warning(
                "Frame %s:%s is gone, abandoning capture request",
                req.render_process_id,
                req.render_frame_id,
            )
            self.state = ArbiterState.ABANDONED_NO_FRAME
            return self.state

        self.state = ArbiterState.OFFERED_TO_CONSENT
        callback = self._guard.peek()
        if self.consent.try_resolve(req, callback):
            self._guard.hand_off()
            self.state = ArbiterState.DELEGATED_TO_CONSENT
            L.debug(
                "Consent authority claimed request from %s", frame.url or "<no url>"
            )
            return self.state

        self.state = ArbiterState.DECIDING
        if self.catalog.has_any_device():
            self.accept()
        else:
            self.deny(ResultCode.NO_HARDWARE)
        return self.state

    def accept(self):
        devices = self.selector.select_devices(
            self.request, self.microphone_requested, self.webcam_requested
        )
        self._resolve(devices, ResultCode.OK)

    def deny(self, result: ResultCode):
        self._resolve([], result)

    def close(self) -> bool:
        """Release the callback; returns True if the shutdown failure fired."""
        return self._guard.close()

    def _resolve(self, devices, result: ResultCode):
        L.info(
            "Capture request %s:%s resolved %s devices=%s",
            self.request.render_process_id,
            self.request.render_frame_id,
            result.value,
            [d.id or d.type.value for d in devices],
        )
        self._guard.fire(devices, result)
        self.state = ArbiterState.RESOLVED

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __del__(self):
        guard = getattr(self, "_guard", None)
        if guard is not None:
            guard.close()


__all__ = ["ArbiterState", "RequestArbiter"]
