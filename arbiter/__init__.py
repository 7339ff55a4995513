from .arbiter import ArbiterState, RequestArbiter
from .desktop_media_id import DesktopMediaId
from .screen import ScreenCaptureResolver
from .selector import DeviceSelector, UnreachableRequestTypeError

__all__ = [
    "ArbiterState",
    "RequestArbiter",
    "DesktopMediaId",
    "ScreenCaptureResolver",
    "DeviceSelector",
    "UnreachableRequestTypeError",
]
