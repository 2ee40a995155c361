"""Exceptions for catalog enrichment and upstream provider helpers."""


class EnrichmentError(Exception):
    """Base exception for the enrichment library."""


class InvalidRequestError(EnrichmentError):
    """Raised when caller input violates a precondition.

    Always raised before any network activity takes place.
    """


class ProviderError(EnrichmentError):
    """Base exception for upstream provider failures.

    Args:
        provider: Provider name (``store``, ``steamspy``, ...).
        message: Human-readable description.
    """

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class UpstreamUnavailableError(ProviderError):
    """Raised on transport failure or a non-success HTTP status."""

    def __init__(self, provider: str, status: int | None = None, reason: str = ""):
        if status is not None:
            message = f"HTTP {status}"
        else:
            message = f"request failed ({reason})" if reason else "request failed"
        super().__init__(provider, message)
        self.status = status


class UpstreamMalformedError(ProviderError):
    """Raised when a success response cannot be parsed into the expected shape."""

    def __init__(self, provider: str, reason: str):
        super().__init__(provider, f"malformed payload ({reason})")
        self.reason = reason
