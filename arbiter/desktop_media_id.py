"""Serialized desktop capture targets (`<type>:<id>:<window_id>`)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

L = logging.getLogger("media_arbiter.desktop_media_id")

TYPE_NONE = "none"
TYPE_SCREEN = "screen"
TYPE_WINDOW = "window"
_PARSEABLE_TYPES = {TYPE_SCREEN, TYPE_WINDOW}
_INT_RE = re.compile(r"-?[0-9]+")

FULL_DESKTOP_SCREEN_ID = -1
NULL_ID = 0


@dataclass(frozen=True, slots=True)
class DesktopMediaId:
    type: str = TYPE_NONE
    id: int = NULL_ID
    window_id: int = NULL_ID

    @classmethod
    def full_desktop(cls) -> "DesktopMediaId":
        return cls(TYPE_SCREEN, FULL_DESKTOP_SCREEN_ID)

    @property
    def is_null(self) -> bool:
        return self.type == TYPE_NONE

    @classmethod
    def parse(cls, value: str) -> "DesktopMediaId":
        """Parse `type:id` or `type:id:window_id`; anything else yields the null id."""
        parts = str(value or "").split(":")
        if len(parts) not in (2, 3) or parts[0] not in _PARSEABLE_TYPES:
            return cls()
        if not all(_INT_RE.fullmatch(p) for p in parts[1:]):
            return cls()
        media_id = int(parts[1])
        window_id = int(parts[2]) if len(parts) == 3 else NULL_ID
        return cls(parts[0], media_id, window_id)

    def to_string(self) -> str:
        if self.is_null:
            return ""
        return f"{self.type}:{self.id}:{self.window_id}"

    def __str__(self) -> str:
        return self.to_string()


__all__ = [
    "DesktopMediaId",
    "TYPE_NONE",
    "TYPE_SCREEN",
    "TYPE_WINDOW",
    "FULL_DESKTOP_SCREEN_ID",
]
