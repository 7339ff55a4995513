"""Core runtime: MediaAccessService assembly and per-request orchestration."""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from core.callback import ResolutionCallback, ResolutionFn
from core.contracts import CaptureRequest, MediaStreamDevice, ResultCode
from core.frames import FrameRegistry, FrameResolver

if TYPE_CHECKING:  # pragma: no cover
    from arbiter.arbiter import ArbiterState
    from catalog.base import DeviceCatalog
    from consent.base import BaseConsentAuthority
    from consent.handler import MediaRequestHandler

L = logging.getLogger("media_arbiter.runtime")


@dataclass
class AppContext:
    catalog: DeviceCatalog
    consent: BaseConsentAuthority
    frames: FrameResolver


class MediaAccessService:
    """Runs one scoped RequestArbiter per incoming capture request."""

    def __init__(self, app_context: AppContext):
        self.app_context = app_context
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()
        self._seq = 0

    @property
    def catalog(self) -> DeviceCatalog:
        return self.app_context.catalog

    @property
    def frames(self) -> FrameResolver:
        return self.app_context.frames

    def handle_request(
        self, request: CaptureRequest, callback: ResolutionFn
    ) -> ArbiterState:
        from arbiter.arbiter import ArbiterState, RequestArbiter

        with self._lock:
            self._seq += 1
            seq = self._seq
            self._counts["total"] += 1
            self._counts["pending"] += 1

        def _on_resolved(devices: list[MediaStreamDevice], result: ResultCode):
            with self._lock:
                self._counts["pending"] -= 1
                self._counts[result.value] += 1
            L.info(
                "[%5s] %s origin=%s devices=%d",
                seq,
                result.value,
                request.security_origin or "-",
                len(devices),
            )
            callback(devices, result)

        ctx = self.app_context
        with RequestArbiter(
            request,
            ResolutionCallback(_on_resolved, label=f"request-{seq}"),
            catalog=ctx.catalog,
            frames=ctx.frames,
            consent=ctx.consent,
        ) as arbiter:
            state = arbiter.run()
        if state is ArbiterState.ABANDONED_NO_FRAME:
            with self._lock:
                self._counts["abandoned_no_frame"] += 1
        return state

    def stats(self) -> dict[str, Any]:
        with self._lock:
            counts = dict(self._counts)
        stats = {
            "total": counts.get("total", 0),
            "pending": counts.get("pending", 0),
            "abandoned_no_frame": counts.get("abandoned_no_frame", 0),
        }
        for code in ResultCode:
            stats[code.value] = counts.get(code.value, 0)
        return stats


def build_service(
    catalog: DeviceCatalog,
    consent: BaseConsentAuthority,
    frames: FrameResolver | None = None,
) -> MediaAccessService:
    return MediaAccessService(
        AppContext(
            catalog=catalog,
            consent=consent,
            frames=frames if frames is not None else FrameRegistry(),
        )
    )


def build_service_from_loaded_config(
    cfg,
    *,
    frames: FrameResolver | None = None,
    handler: MediaRequestHandler | None = None,
) -> MediaAccessService:
    from catalog import create_catalog_from_loaded_config
    from consent import create_consent_from_loaded_config

    consent_kwargs = {}
    if handler is not None:
        if str(cfg.consent.type).strip().lower() != "handler":
            raise ValueError(
                f"media request handler given but consent.type is {cfg.consent.type!r}"
            )
        consent_kwargs["handler"] = handler
    catalog = create_catalog_from_loaded_config(cfg)
    consent = create_consent_from_loaded_config(cfg, **consent_kwargs)
    L.info(
        "Media access service: catalog=%s audio=%d video=%d consent=%s",
        cfg.catalog.type,
        len(catalog.list_audio_devices()),
        len(catalog.list_video_devices()),
        cfg.consent.type,
    )
    return build_service(catalog, consent, frames)


__all__ = [
    "AppContext",
    "MediaAccessService",
    "build_service",
    "build_service_from_loaded_config",
]
