# -- coding: utf-8 --

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Type

from core.contracts import MediaStreamDevice, MediaStreamType
from core.registry import register_named, resolve_registered

CatalogFactory = Dict[str, Type["DeviceCatalog"]]
_registry: CatalogFactory = {}


@dataclass
class CatalogConfig:
    audio_devices: list[MediaStreamDevice] = field(default_factory=list)
    video_devices: list[MediaStreamDevice] = field(default_factory=list)
    default_audio_id: str = ""
    default_video_id: str = ""


def build_catalog_config(cfg_block) -> CatalogConfig:
    return CatalogConfig(
        audio_devices=_build_devices(
            cfg_block.audio_devices, MediaStreamType.DEVICE_AUDIO_CAPTURE
        ),
        video_devices=_build_devices(
            cfg_block.video_devices, MediaStreamType.DEVICE_VIDEO_CAPTURE
        ),
        default_audio_id=str(cfg_block.default_audio_id or ""),
        default_video_id=str(cfg_block.default_video_id or ""),
    )


def _build_devices(entries, stream_type: MediaStreamType) -> list[MediaStreamDevice]:
    devices = []
    for entry in entries or []:
        device_id = str(entry.get("id") or "")
        devices.append(
            MediaStreamDevice(
                type=stream_type,
                id=device_id,
                name=str(entry.get("name") or device_id),
            )
        )
    return devices


class DeviceCatalog(ABC):
    """Read view of the capture devices currently attached to the system.

    Enumeration order is owned by the backend and is never re-sorted by
    callers; "first available" always means the first listed device.
    """

    def __init__(self, cfg: CatalogConfig | None = None):
        self.cfg = cfg or CatalogConfig()

    @abstractmethod
    def list_audio_devices(self) -> list[MediaStreamDevice]:
        """Return the audio capture devices in enumeration order."""

    @abstractmethod
    def list_video_devices(self) -> list[MediaStreamDevice]:
        """Return the video capture devices in enumeration order."""

    def find_audio_device_by_id(self, device_id: str) -> MediaStreamDevice | None:
        return _find_by_id(self.list_audio_devices(), device_id)

    def find_video_device_by_id(self, device_id: str) -> MediaStreamDevice | None:
        return _find_by_id(self.list_video_devices(), device_id)

    def first_available_audio_device(self) -> MediaStreamDevice | None:
        devices = self.list_audio_devices()
        return devices[0] if devices else None

    def first_available_video_device(self) -> MediaStreamDevice | None:
        devices = self.list_video_devices()
        return devices[0] if devices else None

    def has_any_device(self) -> bool:
        return bool(self.list_audio_devices() or self.list_video_devices())

    def default_audio_device(self) -> MediaStreamDevice | None:
        preferred = self.find_audio_device_by_id(self.cfg.default_audio_id)
        return preferred or self.first_available_audio_device()

    def default_video_device(self) -> MediaStreamDevice | None:
        preferred = self.find_video_device_by_id(self.cfg.default_video_id)
        return preferred or self.first_available_video_device()

    def get_default_devices(
        self, need_audio: bool, need_video: bool
    ) -> list[MediaStreamDevice]:
        """Default device for each needed media type, audio first."""
        devices = []
        if need_audio:
            device = self.default_audio_device()
            if device is not None:
                devices.append(device)
        if need_video:
            device = self.default_video_device()
            if device is not None:
                devices.append(device)
        return devices


def _find_by_id(
    devices: list[MediaStreamDevice], device_id: str
) -> MediaStreamDevice | None:
    if not device_id:
        return None
    for device in devices:
        if device.id == device_id:
            return device
    return None


def register_catalog(name: str):
    return register_named(_registry, name)


def create_catalog(name: str, cfg: CatalogConfig) -> DeviceCatalog:
    cls = resolve_registered(
        _registry,
        name,
        package=__package__ or "catalog",
        unknown_label="catalog type",
    )
    return cls(cfg)


def create_catalog_from_loaded_config(cfg) -> DeviceCatalog:
    return create_catalog(cfg.catalog.type, build_catalog_config(cfg.catalog))


__all__ = [
    "CatalogConfig",
    "build_catalog_config",
    "DeviceCatalog",
    "register_catalog",
    "create_catalog",
    "create_catalog_from_loaded_config",
]
