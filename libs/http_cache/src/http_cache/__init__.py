"""In-memory response caching for upstream catalog providers."""

from .exceptions import CacheError, InvalidCapacityError, InvalidTTLError
from .expiring_cache import CacheEntry, ExpiringCache

__all__ = [
    "CacheEntry",
    "CacheError",
    "ExpiringCache",
    "InvalidCapacityError",
    "InvalidTTLError",
]
