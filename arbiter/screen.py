"""Tab and desktop capture: granted without consent or hardware lookup."""

from __future__ import annotations

import logging

from arbiter.desktop_media_id import DesktopMediaId
from core.contracts import (
    CaptureRequest,
    MediaStreamDevice,
    MediaStreamType,
    ResultCode,
)

L = logging.getLogger("media_arbiter.screen")

LOOPBACK_DEVICE_ID = "loopback"
SYSTEM_AUDIO_LABEL = "System Audio"
SCREEN_LABEL = "Screen"


class ScreenCaptureResolver:
    def resolve(
        self, request: CaptureRequest
    ) -> tuple[list[MediaStreamDevice], ResultCode]:
        devices: list[MediaStreamDevice] = []
        if request.audio_type == MediaStreamType.GUM_TAB_AUDIO_CAPTURE:
            devices.append(MediaStreamDevice(MediaStreamType.GUM_TAB_AUDIO_CAPTURE))
        if request.video_type == MediaStreamType.GUM_TAB_VIDEO_CAPTURE:
            devices.append(MediaStreamDevice(MediaStreamType.GUM_TAB_VIDEO_CAPTURE))
        if request.audio_type == MediaStreamType.GUM_DESKTOP_AUDIO_CAPTURE:
            devices.append(
                MediaStreamDevice(
                    MediaStreamType.GUM_DESKTOP_AUDIO_CAPTURE,
                    LOOPBACK_DEVICE_ID,
                    SYSTEM_AUDIO_LABEL,
                )
            )
        if request.video_type == MediaStreamType.GUM_DESKTOP_VIDEO_CAPTURE:
            devices.append(
                MediaStreamDevice(
                    MediaStreamType.GUM_DESKTOP_VIDEO_CAPTURE,
                    self._desktop_target(request.requested_video_device_id),
                    SCREEN_LABEL,
                )
            )
        result = ResultCode.OK if devices else ResultCode.NO_HARDWARE
        return devices, result

    @staticmethod
    def _desktop_target(requested_id: str) -> str:
        # No id means a plain screen share, not a source picked by the embedder.
        if not requested_id:
            return DesktopMediaId.full_desktop().to_string()
        media_id = DesktopMediaId.parse(requested_id)
        if media_id.is_null:
            L.warning("Unparsable desktop capture id %r", requested_id)
        return media_id.to_string()


__all__ = [
    "ScreenCaptureResolver",
    "LOOPBACK_DEVICE_ID",
    "SYSTEM_AUDIO_LABEL",
    "SCREEN_LABEL",
]
