"""Name search over the Steam app list."""

from collections.abc import Iterable

from common.models import AppListEntry

from enrichment.exceptions import InvalidRequestError


def _match_rank(name: str, query: str) -> int | None:
    lowered = name.lower()
    if lowered == query:
        return 0
    if lowered.startswith(query):
        return 1
    if query in lowered:
        return 2
    return None


def rank_apps(apps: Iterable[AppListEntry], query: str, limit: int) -> list[AppListEntry]:
    """Return apps whose name contains `query`, best matches first.

    Matching is case-insensitive. Exact matches rank before prefix matches,
    which rank before substring matches; ties go to the shorter name, then to
    list order.

    Raises:
        InvalidRequestError: If the query is blank.
    """
    needle = query.strip().lower()
    if not needle:
        raise InvalidRequestError("Query parameter 'q' is required")

    scored: list[tuple[int, int, int, AppListEntry]] = []
    for position, app in enumerate(apps):
        rank = _match_rank(app.name, needle)
        if rank is not None:
            scored.append((rank, len(app.name), position, app))

    scored.sort(key=lambda item: item[:3])
    return [app for *_, app in scored[:limit]]
