# -- coding: utf-8 --

import logging
import threading
from collections.abc import Iterable

from catalog.base import CatalogConfig, DeviceCatalog, register_catalog
from core.contracts import MediaStreamDevice, MediaStreamType

L = logging.getLogger("media_arbiter.catalog.static")


@register_catalog("static")
class StaticDeviceCatalog(DeviceCatalog):
    """In-memory catalog seeded from config and updated on device-change events."""

    def __init__(self, cfg: CatalogConfig | None = None):
        super().__init__(cfg)
        self.lock = threading.Lock()
        self._audio: tuple[MediaStreamDevice, ...] = tuple(self.cfg.audio_devices)
        self._video: tuple[MediaStreamDevice, ...] = tuple(self.cfg.video_devices)

    def list_audio_devices(self) -> list[MediaStreamDevice]:
        with self.lock:
            return list(self._audio)

    def list_video_devices(self) -> list[MediaStreamDevice]:
        with self.lock:
            return list(self._video)

    def set_audio_devices(self, devices: Iterable[MediaStreamDevice]):
        checked = _check_type(devices, MediaStreamType.DEVICE_AUDIO_CAPTURE)
        with self.lock:
            self._audio = checked
        L.info("Audio capture devices changed: %d available", len(checked))

    def set_video_devices(self, devices: Iterable[MediaStreamDevice]):
        checked = _check_type(devices, MediaStreamType.DEVICE_VIDEO_CAPTURE)
        with self.lock:
            self._video = checked
        L.info("Video capture devices changed: %d available", len(checked))


def _check_type(
    devices: Iterable[MediaStreamDevice], expected: MediaStreamType
) -> tuple[MediaStreamDevice, ...]:
    checked = tuple(devices)
    for device in checked:
        if device.type != expected:
            raise ValueError(
                f"device {device.id!r} has type {device.type.value}, "
                f"expected {expected.value}"
            )
    return checked


__all__ = ["StaticDeviceCatalog"]
