"""Request validation for enrichment entry points.

Every check here runs before any provider is contacted and raises
`InvalidRequestError` on failure.
"""

from collections.abc import Iterable
from typing import Any

from enrichment.exceptions import InvalidRequestError


def parse_app_id(raw: Any) -> int:
    """Parse one appid from an int or a decimal string.

    Raises:
        InvalidRequestError: If the value is not a positive integer.
    """
    if isinstance(raw, bool):
        raise InvalidRequestError(f"Invalid app id: {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise InvalidRequestError(f"Invalid app id: {raw!r}")

    if value <= 0:
        raise InvalidRequestError(f"Invalid app id: {raw!r}")
    return value


def parse_app_ids(raw_ids: Iterable[Any], *, max_items: int) -> list[int]:
    """Validate a caller-supplied identifier list.

    Order and duplicates are preserved: each occurrence is processed.

    Args:
        raw_ids: Ints or decimal strings.
        max_items: Maximum accepted list length.

    Returns:
        The parsed identifiers.

    Raises:
        InvalidRequestError: Empty list, too many ids, or any invalid id.
    """
    ids = [parse_app_id(raw) for raw in raw_ids]
    if not ids:
        raise InvalidRequestError("No app ids provided")
    if len(ids) > max_items:
        raise InvalidRequestError(f"Too many app ids: {len(ids)} (max {max_items})")
    return ids


def parse_app_id_csv(raw: str | None, *, max_items: int) -> list[int]:
    """Parse a comma-separated ``ids`` query parameter."""
    parts = [part.strip() for part in (raw or "").split(",") if part.strip()]
    return parse_app_ids(parts, max_items=max_items)


def clamp_limit(limit: int | None, *, default: int, maximum: int) -> int:
    """Clamp a result limit into ``[1, maximum]``, using `default` when unset."""
    if limit is None:
        return default
    return max(1, min(limit, maximum))
