from .base import (
    ConsentConfig,
    BaseConsentAuthority,
    register_consent,
    create_consent,
    build_consent_config,
    create_consent_from_loaded_config,
)

__all__ = [
    "ConsentConfig",
    "BaseConsentAuthority",
    "register_consent",
    "create_consent",
    "build_consent_config",
    "create_consent_from_loaded_config",
]
