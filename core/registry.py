from __future__ import annotations

import importlib
import logging
from collections.abc import MutableMapping
from typing import TypeVar

L = logging.getLogger("media_arbiter.registry")

T = TypeVar("T")


def register_named(registry: MutableMapping[str, T], name: str):
    """Decorator to register a backend factory under a string key."""
    key = _normalize_key(name)

    def decorator(obj: T) -> T:
        if key in registry and registry[key] is not obj:
            L.debug("Backend %r re-registered by %r", key, obj)
        registry[key] = obj
        return obj

    return decorator


def resolve_registered(
    registry: MutableMapping[str, T],
    name: str,
    *,
    package: str,
    unknown_label: str,
) -> T:
    """Return the backend registered as `name`, lazily importing `<package>.<name>`."""
    key = _normalize_key(name)
    import_err: Exception | None = None
    if key and key not in registry:
        try:
            importlib.import_module(f"{package}.{key}")
        except ImportError as e:
            import_err = e
    if key not in registry:
        hint = f" (import failed: {import_err})" if import_err else ""
        raise ValueError(
            f"Unknown {unknown_label} '{name}'. "
            f"Available: {', '.join(sorted(registry)) or 'none'}{hint}"
        )
    return registry[key]


def _normalize_key(name: object) -> str:
    return str(name or "").strip().lower()


__all__ = ["register_named", "resolve_registered"]
