"""
Per-application slowapi limiter.

Each app built by the factory gets its own Limiter, so counters, the enabled
flag and the configured limits never leak between app instances. The limiter
is disabled in the test environment.
"""

from core.settings import Settings
from slowapi import Limiter
from slowapi.util import get_remote_address


def build_limiter(settings: Settings) -> Limiter:
    """
    Create the limiter for one application.

    Counters are kept per endpoint function and client address, in memory.
    """
    return Limiter(
        key_func=get_remote_address,
        enabled=not settings.is_test,
        key_style="endpoint",
    )
