"""Config value validation."""

from __future__ import annotations

from typing import Any

from .schema import ConfigError, LoadedConfig

LOG_LEVELS = ("debug", "info", "warning", "warn", "error", "critical")


def validate_config(cfg: LoadedConfig) -> None:
    # runtime
    _require_choice("runtime.log_level", cfg.runtime.log_level, LOG_LEVELS)

    # catalog
    _require_name("catalog.type", cfg.catalog.type)
    audio_ids = _require_device_list("catalog.audio_devices", cfg.catalog.audio_devices)
    video_ids = _require_device_list("catalog.video_devices", cfg.catalog.video_devices)
    _require_known_id(
        "catalog.default_audio_id", cfg.catalog.default_audio_id, audio_ids
    )
    _require_known_id(
        "catalog.default_video_id", cfg.catalog.default_video_id, video_ids
    )

    # consent
    _require_name("consent.type", cfg.consent.type)
    _require_str_list("consent.blocked_origins", cfg.consent.blocked_origins)


def _require_choice(name: str, value: Any, choices: tuple[str, ...]) -> str:
    sv = str(value or "").strip().lower()
    if sv not in choices:
        raise ConfigError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return sv


def _require_name(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{name} must be a non-empty string")
    return value


def _require_str_list(name: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{name} must be a list of strings")
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigError(f"{name}[{i}] must be a string")
    return value


def _require_device_list(name: str, value: Any) -> set[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{name} must be a list of devices")
    seen: set[str] = set()
    for i, entry in enumerate(value):
        device_id = str((entry or {}).get("id") or "")
        if not device_id:
            raise ConfigError(f"{name}[{i}].id must be a non-empty string")
        if device_id in seen:
            raise ConfigError(f"{name}[{i}].id duplicates {device_id!r}")
        seen.add(device_id)
    return seen


def _require_known_id(name: str, value: Any, known: set[str]) -> str:
    sv = str(value or "")
    if sv and sv not in known:
        raise ConfigError(f"{name} {sv!r} is not a configured device")
    return sv


__all__ = ["validate_config", "LOG_LEVELS"]
