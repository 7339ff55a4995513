# -- coding: utf-8 --

import logging

from consent.base import BaseConsentAuthority, ConsentConfig, register_consent
from core.callback import ResolutionCallback
from core.contracts import CaptureRequest, ResultCode

L = logging.getLogger("media_arbiter.consent.policy")


@register_consent("policy")
class OriginPolicyConsentAuthority(BaseConsentAuthority):
    """Denies requests from blocked origins; defers everything else."""

    def __init__(self, cfg: ConsentConfig | None = None):
        super().__init__(cfg)
        self._blocked = {_normalize_origin(o) for o in self.cfg.blocked_origins}
        self._blocked.discard("")

    def try_resolve(
        self, request: CaptureRequest, callback: ResolutionCallback
    ) -> bool:
        origin = _normalize_origin(request.security_origin)
        if origin not in self._blocked:
            return False
        L.info("Denying capture request from blocked origin %s", origin)
        callback.run([], ResultCode.PERMISSION_DENIED)
        return True


def _normalize_origin(origin: object) -> str:
    return str(origin or "").strip().rstrip("/").lower()


__all__ = ["OriginPolicyConsentAuthority"]
