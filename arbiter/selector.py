"""Concrete device choice for an accepted hardware capture request."""

from __future__ import annotations

import logging

from catalog.base import DeviceCatalog
from core.contracts import (
    CaptureRequest,
    MediaStreamDevice,
    MediaStreamType,
    RequestType,
)

L = logging.getLogger("media_arbiter.selector")


class UnreachableRequestTypeError(RuntimeError):
    pass


class DeviceSelector:
    """Reads the catalog only; never mutates the request or the catalog."""

    def __init__(self, catalog: DeviceCatalog):
        self.catalog = catalog

    def select_devices(
        self,
        request: CaptureRequest,
        mic_requested: bool,
        cam_requested: bool,
    ) -> list[MediaStreamDevice]:
        if not (mic_requested or cam_requested):
            return []
        request_type = request.request_type
        if request_type == RequestType.OPEN_DEVICE_PEPPER_ONLY:
            device = self._select_pepper_device(request)
            return [device] if device is not None else []
        if request_type == RequestType.GENERATE_STREAM:
            return self._select_stream_devices(request, mic_requested, cam_requested)
        if request_type == RequestType.DEVICE_ACCESS:
            return self.catalog.get_default_devices(mic_requested, cam_requested)
        # Device updates never ask for new devices.
        raise UnreachableRequestTypeError(
            f"{request_type.value} request must not reach device selection"
        )

    def _select_pepper_device(
        self, request: CaptureRequest
    ) -> MediaStreamDevice | None:
        catalog = self.catalog
        if request.audio_type == MediaStreamType.DEVICE_AUDIO_CAPTURE:
            device = catalog.find_audio_device_by_id(request.requested_audio_device_id)
            if device is None:
                L.debug(
                    "Pepper audio device %r not found, using first available",
                    request.requested_audio_device_id,
                )
                device = catalog.first_available_audio_device()
            return device
        if request.video_type == MediaStreamType.DEVICE_VIDEO_CAPTURE:
            device = catalog.find_video_device_by_id(request.requested_video_device_id)
            if device is None:
                L.debug(
                    "Pepper video device %r not found, using first available",
                    request.requested_video_device_id,
                )
                device = catalog.first_available_video_device()
            return device
        return None

    def _select_stream_devices(
        self,
        request: CaptureRequest,
        mic_requested: bool,
        cam_requested: bool,
    ) -> list[MediaStreamDevice]:
        devices: list[MediaStreamDevice] = []
        needs_audio = mic_requested
        needs_video = cam_requested

        if request.requested_audio_device_id:
            audio = self.catalog.find_audio_device_by_id(
                request.requested_audio_device_id
            )
            if audio is not None:
                devices.append(audio)
                needs_audio = False
        if request.requested_video_device_id:
            video = self.catalog.find_video_device_by_id(
                request.requested_video_device_id
            )
            if video is not None:
                devices.append(video)
                needs_video = False

        if needs_audio or needs_video:
            devices.extend(self.catalog.get_default_devices(needs_audio, needs_video))
        return devices


__all__ = ["DeviceSelector", "UnreachableRequestTypeError"]
