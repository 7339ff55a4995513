"""Single-use resolution callback and the scoped owner that guarantees it runs."""

from __future__ import annotations

import logging
from typing import Callable

from core.contracts import MediaStreamDevice, ResultCode

L = logging.getLogger("media_arbiter.callback")

ResolutionFn = Callable[[list[MediaStreamDevice], ResultCode], None]


class CallbackAlreadyRunError(RuntimeError):
    pass


class ResolutionCallback:
    """Sink for exactly one (devices, result) pair.

    A second run is a programming error and raises CallbackAlreadyRunError.
    """

    __slots__ = ("_fn", "_has_run", "label")

    def __init__(self, fn: ResolutionFn, *, label: str = ""):
        self._fn = fn
        self._has_run = False
        self.label = label

    @property
    def has_run(self) -> bool:
        return self._has_run

    def run(self, devices: list[MediaStreamDevice], result: ResultCode) -> None:
        if self._has_run:
            raise CallbackAlreadyRunError(
                f"resolution callback {self.label or hex(id(self))} already run"
            )
        self._has_run = True
        self._fn(list(devices), ResultCode(result))

    __call__ = run

    def __repr__(self) -> str:
        state = "run" if self._has_run else "pending"
        return f"ResolutionCallback({self.label or hex(id(self))}, {state})"


class CallbackGuard:
    """Scoped owner of a ResolutionCallback.

    The callback leaves the guard exactly once: fired through `fire`, handed
    off through `hand_off`, or fired with FAILED_DUE_TO_SHUTDOWN on `close`.
    """

    def __init__(self, callback: ResolutionCallback | ResolutionFn):
        if not isinstance(callback, ResolutionCallback):
            callback = ResolutionCallback(callback)
        self._callback: ResolutionCallback | None = callback

    @property
    def held(self) -> bool:
        return self._callback is not None

    def peek(self) -> ResolutionCallback:
        if self._callback is None:
            raise RuntimeError("resolution callback no longer held")
        return self._callback

    def hand_off(self) -> ResolutionCallback:
        """Release ownership without running; the receiver must run it."""
        callback = self.peek()
        self._callback = None
        return callback

    def fire(self, devices: list[MediaStreamDevice], result: ResultCode) -> None:
        self.hand_off().run(devices, result)

    def close(self) -> bool:
        """Fire the shutdown failure if still held. Returns True if it fired."""
        if self._callback is None:
            return False
        L.warning(
            "Resolving pending request %s with %s",
            self._callback.label or "<unnamed>",
            ResultCode.FAILED_DUE_TO_SHUTDOWN.value,
        )
        self.fire([], ResultCode.FAILED_DUE_TO_SHUTDOWN)
        return True

    def __del__(self):
        if getattr(self, "_callback", None) is not None:
            self.close()


__all__ = [
    "CallbackAlreadyRunError",
    "ResolutionFn",
    "ResolutionCallback",
    "CallbackGuard",
]
