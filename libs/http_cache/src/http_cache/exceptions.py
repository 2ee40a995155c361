"""Custom exceptions for the expiring cache library."""


class CacheError(Exception):
    """Base exception for cache-related errors."""


class InvalidCapacityError(CacheError):
    """Raised when a cache is constructed with a non-positive capacity."""

    def __init__(self, capacity: int | None = None):
        if capacity is not None:
            super().__init__(f"Cache capacity must be positive, got {capacity}")
        else:
            super().__init__("Cache capacity must be positive")


class InvalidTTLError(CacheError):
    """Raised when TTL value is invalid (negative or incorrect type)."""

    def __init__(self, ttl_value: float | None = None, field_name: str = "TTL"):
        if ttl_value is not None:
            super().__init__(f"{field_name} must be non-negative, got {ttl_value}")
        else:
            super().__init__(f"{field_name} must be non-negative")
