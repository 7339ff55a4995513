"""Typed config schema blocks shared by loader/validator/runtime."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


class ConfigError(Exception):
    pass


@dataclass
class RuntimeConfig:
    log_level: str = "info"


@dataclass
class CatalogConfigBlock:
    type: str = "static"
    audio_devices: List[Dict[str, Any]] = field(default_factory=list)
    video_devices: List[Dict[str, Any]] = field(default_factory=list)
    default_audio_id: str = ""
    default_video_id: str = ""


@dataclass
class ConsentConfigBlock:
    type: str = "decline"
    blocked_origins: List[str] = field(default_factory=list)


@dataclass
class LoadedConfig:
    runtime: RuntimeConfig
    catalog: CatalogConfigBlock
    consent: ConsentConfigBlock
    paths: Dict[str, str] = field(default_factory=dict)


__all__ = [
    "ConfigError",
    "RuntimeConfig",
    "CatalogConfigBlock",
    "ConsentConfigBlock",
    "LoadedConfig",
]
