"""TTL cache for resolver lookups."""
from typing import Optional

from credit_engine.config import settings
from .ttl_cache import TTLCache
from .cache_key import team_weights_key, user_multiplier_key

_resolver_cache: Optional[TTLCache] = None


def get_resolver_cache() -> TTLCache:
    """Process-wide cache shared by the weight and multiplier resolvers."""
    global _resolver_cache
    if _resolver_cache is None:
        _resolver_cache = TTLCache(ttl_seconds=settings.cache_ttl_seconds)
    return _resolver_cache


__all__ = ["TTLCache", "team_weights_key", "user_multiplier_key", "get_resolver_cache"]
