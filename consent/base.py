# -- coding: utf-8 --

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Type

from core.callback import ResolutionCallback
from core.contracts import CaptureRequest
from core.registry import register_named, resolve_registered

ConsentFactory = Dict[str, Type["BaseConsentAuthority"]]
_registry: ConsentFactory = {}


@dataclass
class ConsentConfig:
    blocked_origins: list[str] = field(default_factory=list)


class BaseConsentAuthority(ABC):
    """Gets the first chance to resolve a hardware capture request.

    `try_resolve` returns True when the authority takes ownership of the
    callback; it then runs it exactly once, immediately or later. On False
    the callback must be left untouched.
    """

    def __init__(self, cfg: ConsentConfig | None = None):
        self.cfg = cfg or ConsentConfig()

    @abstractmethod
    def try_resolve(
        self, request: CaptureRequest, callback: ResolutionCallback
    ) -> bool:
        pass


def register_consent(name: str):
    return register_named(_registry, name)


def create_consent(name: str, cfg: ConsentConfig, **kwargs) -> BaseConsentAuthority:
    cls = resolve_registered(
        _registry,
        name,
        package=__package__ or "consent",
        unknown_label="consent type",
    )
    return cls(cfg, **kwargs)


def build_consent_config(cfg_block) -> ConsentConfig:
    return ConsentConfig(
        blocked_origins=[str(o) for o in (cfg_block.blocked_origins or [])],
    )


def create_consent_from_loaded_config(cfg, **kwargs) -> BaseConsentAuthority:
    return create_consent(cfg.consent.type, build_consent_config(cfg.consent), **kwargs)


__all__ = [
    "ConsentConfig",
    "BaseConsentAuthority",
    "register_consent",
    "create_consent",
    "build_consent_config",
    "create_consent_from_loaded_config",
]
