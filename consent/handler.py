# -- coding: utf-8 --

import logging
from typing import Callable

from consent.base import BaseConsentAuthority, ConsentConfig, register_consent
from core.callback import ResolutionCallback
from core.contracts import CaptureRequest

L = logging.getLogger("media_arbiter.consent.handler")

MediaRequestHandler = Callable[[CaptureRequest, ResolutionCallback], None]


@register_consent("handler")
class HandlerConsentAuthority(BaseConsentAuthority):
    """Routes requests to an application-installed handler (e.g. a device picker).

    While a handler is installed every request is claimed; the handler owns
    the callback and may run it after `try_resolve` has returned. A handler
    that raises still owns the callback it was given.
    """

    def __init__(
        self,
        cfg: ConsentConfig | None = None,
        handler: MediaRequestHandler | None = None,
    ):
        super().__init__(cfg)
        self._handler = handler

    def set_handler(self, handler: MediaRequestHandler | None):
        self._handler = handler

    def try_resolve(
        self, request: CaptureRequest, callback: ResolutionCallback
    ) -> bool:
        handler = self._handler
        if handler is None:
            return False
        L.debug(
            "Handing request from %s:%s to media request handler",
            request.render_process_id,
            request.render_frame_id,
        )
        try:
            handler(request, callback)
        except Exception:
            L.exception(
                "Media request handler failed for %s:%s",
                request.render_process_id,
                request.render_frame_id,
            )
        return True


__all__ = ["MediaRequestHandler", "HandlerConsentAuthority"]
