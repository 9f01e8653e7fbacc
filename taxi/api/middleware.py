"""Per-application slowapi rate limiter, keyed by client address."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from taxi.config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """Limiter applying ``settings.rate_limit`` to every route.

    Each app gets its own limiter, so counters are never shared between
    app instances.
    """
    return Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
