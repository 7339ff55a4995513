from consent.base import BaseConsentAuthority, register_consent


@register_consent("decline")
class DeclineConsentAuthority(BaseConsentAuthority):
    """No picker installed: every request falls through to the arbiter."""

    def try_resolve(self, request, callback) -> bool:
        return False


__all__ = ["DeclineConsentAuthority"]
