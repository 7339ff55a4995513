"""YAML loader and section builders for arbiter configuration."""

from __future__ import annotations

import glob
import os
from typing import Any

import yaml

from .schema import (
    CatalogConfigBlock,
    ConfigError,
    ConsentConfigBlock,
    LoadedConfig,
    RuntimeConfig,
)

_DEVICE_KEYS = {"id", "name"}


def load_config(config_dir: str = "config") -> LoadedConfig:
    main_path = _find_main_config(config_dir)
    main_data = _read_yaml(main_path)
    _validate_allowed_keys(
        main_data, {"runtime", "catalog", "consent"}, "<root>", main_path
    )

    runtime = _build_dataclass(
        RuntimeConfig, _section(main_data, "runtime", main_path), main_path, "runtime"
    )
    catalog = _build_catalog_config(
        _section(main_data, "catalog", main_path), main_path
    )
    consent = _build_dataclass(
        ConsentConfigBlock,
        _section(main_data, "consent", main_path),
        main_path,
        "consent",
    )
    return LoadedConfig(
        runtime=runtime,
        catalog=catalog,
        consent=consent,
        paths={"main": main_path},
    )


def _find_main_config(config_dir: str) -> str:
    patterns = [
        os.path.join(config_dir, "main_*.yaml"),
        os.path.join(config_dir, "main_*.yml"),
    ]
    candidates: list[str] = []
    for pattern in patterns:
        candidates.extend(glob.glob(pattern))
    if len(candidates) == 0:
        raise ConfigError(f"No main_*.yaml found under {config_dir}")
    if len(candidates) > 1:
        raise ConfigError(
            f"Expected exactly one main_*.yaml, found: {', '.join(sorted(candidates))}"
        )
    return candidates[0]


def _read_yaml(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"YAML root must be a mapping: {path}")
    return data


def _section(data: dict[str, Any], name: str, main_path: str) -> dict[str, Any]:
    block = data.get(name)
    if block is None:
        return {}
    if not isinstance(block, dict):
        raise ConfigError(f"'{name}' must be a mapping in {main_path}")
    return block


def _build_dataclass(cls, data: dict[str, Any], main_path: str, section: str):
    obj = cls()
    fields = cls.__dataclass_fields__
    for k, v in (data or {}).items():
        if k in fields:
            setattr(obj, k, v)
        else:
            raise ConfigError(f"Unknown field {section}.{k} in {main_path}")
    return obj


def _validate_allowed_keys(
    data: dict[str, Any], allowed_keys: set[str], section: str, main_path: str
) -> None:
    for key in data.keys():
        if key not in allowed_keys:
            raise ConfigError(f"Unknown field {section}.{key} in {main_path}")


def _build_catalog_config(data: dict[str, Any], main_path: str) -> CatalogConfigBlock:
    cfg = _build_dataclass(CatalogConfigBlock, data, main_path, "catalog")
    cfg.audio_devices = _build_device_list(
        cfg.audio_devices, "catalog.audio_devices", main_path
    )
    cfg.video_devices = _build_device_list(
        cfg.video_devices, "catalog.video_devices", main_path
    )
    cfg.default_audio_id = str(cfg.default_audio_id or "")
    cfg.default_video_id = str(cfg.default_video_id or "")
    return cfg


def _build_device_list(
    entries: Any, section: str, main_path: str
) -> list[dict[str, Any]]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ConfigError(f"'{section}' must be a list in {main_path}")
    devices = []
    for i, entry in enumerate(entries):
        # A bare string is shorthand for a device whose name equals its id.
        if isinstance(entry, str):
            entry = {"id": entry}
        if not isinstance(entry, dict):
            raise ConfigError(f"'{section}[{i}]' must be a mapping in {main_path}")
        _validate_allowed_keys(entry, _DEVICE_KEYS, f"{section}[{i}]", main_path)
        devices.append(
            {
                "id": str(entry.get("id") or ""),
                "name": str(entry.get("name") or entry.get("id") or ""),
            }
        )
    return devices


__all__ = ["load_config"]
