"""Data contracts for capture requests, granted devices, and resolutions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class MediaStreamType(str, Enum):
    NO_SERVICE = "NO_SERVICE"
    DEVICE_AUDIO_CAPTURE = "DEVICE_AUDIO_CAPTURE"
    DEVICE_VIDEO_CAPTURE = "DEVICE_VIDEO_CAPTURE"
    GUM_TAB_AUDIO_CAPTURE = "GUM_TAB_AUDIO_CAPTURE"
    GUM_TAB_VIDEO_CAPTURE = "GUM_TAB_VIDEO_CAPTURE"
    GUM_DESKTOP_AUDIO_CAPTURE = "GUM_DESKTOP_AUDIO_CAPTURE"
    GUM_DESKTOP_VIDEO_CAPTURE = "GUM_DESKTOP_VIDEO_CAPTURE"


class RequestType(str, Enum):
    GENERATE_STREAM = "GENERATE_STREAM"
    OPEN_DEVICE_PEPPER_ONLY = "OPEN_DEVICE_PEPPER_ONLY"
    DEVICE_ACCESS = "DEVICE_ACCESS"
    DEVICE_UPDATE = "DEVICE_UPDATE"


class ResultCode(str, Enum):
    OK = "OK"
    NO_HARDWARE = "NO_HARDWARE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    FAILED_DUE_TO_SHUTDOWN = "FAILED_DUE_TO_SHUTDOWN"


SCREEN_AUDIO_TYPES = frozenset(
    {
        MediaStreamType.GUM_TAB_AUDIO_CAPTURE,
        MediaStreamType.GUM_DESKTOP_AUDIO_CAPTURE,
    }
)
SCREEN_VIDEO_TYPES = frozenset(
    {
        MediaStreamType.GUM_TAB_VIDEO_CAPTURE,
        MediaStreamType.GUM_DESKTOP_VIDEO_CAPTURE,
    }
)


@dataclass(frozen=True, slots=True)
class MediaStreamDevice:
    type: MediaStreamType
    id: str = ""
    name: str = ""


@dataclass(frozen=True, slots=True)
class FrameInfo:
    render_process_id: int
    render_frame_id: int
    url: str = ""


@dataclass(frozen=True, slots=True)
class CaptureRequest:
    render_process_id: int = 0
    render_frame_id: int = 0
    audio_type: MediaStreamType = MediaStreamType.NO_SERVICE
    video_type: MediaStreamType = MediaStreamType.NO_SERVICE
    request_type: RequestType = RequestType.GENERATE_STREAM
    requested_audio_device_id: str = ""
    requested_video_device_id: str = ""
    security_origin: str = ""

    @property
    def is_screen_capture(self) -> bool:
        return (
            self.audio_type in SCREEN_AUDIO_TYPES
            or self.video_type in SCREEN_VIDEO_TYPES
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CaptureRequest":
        """Build a request from plain values; enum fields accept their names."""
        return cls(
            render_process_id=int(data.get("render_process_id", 0)),
            render_frame_id=int(data.get("render_frame_id", 0)),
            audio_type=_parse_enum(
                MediaStreamType, data.get("audio_type"), "audio_type"
            ),
            video_type=_parse_enum(
                MediaStreamType, data.get("video_type"), "video_type"
            ),
            request_type=_parse_enum(
                RequestType,
                data.get("request_type") or RequestType.GENERATE_STREAM,
                "request_type",
            ),
            requested_audio_device_id=str(
                data.get("requested_audio_device_id") or ""
            ),
            requested_video_device_id=str(
                data.get("requested_video_device_id") or ""
            ),
            security_origin=str(data.get("security_origin") or ""),
        )


def _parse_enum(enum_cls, value, field_name: str):
    if value is None or value == "":
        return next(iter(enum_cls))
    if isinstance(value, enum_cls):
        return value
    raw = str(value).strip().upper().replace("-", "_")
    try:
        return enum_cls(raw)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"Invalid {field_name} {value!r}. Expected one of: {choices}"
        ) from None


__all__ = [
    "MediaStreamType",
    "RequestType",
    "ResultCode",
    "SCREEN_AUDIO_TYPES",
    "SCREEN_VIDEO_TYPES",
    "MediaStreamDevice",
    "FrameInfo",
    "CaptureRequest",
]
