"""Normalization of raw provider payloads into `NormalizedRecord`.

All functions here are pure: no I/O, no clock, no shared state. Fields a
provider does not supply stay ``None`` (or an empty list); nothing is filled
with a guessed default.
"""

from common.models import DetailLevel, NormalizedRecord
from common.models.provider_models import SteamSpyAppData, StoreAppDetails

HEADER_IMAGE_URL = "https://cdn.akamai.steamstatic.com/steam/apps/{appid}/header.jpg"

# SteamSpy reports prices in US cents regardless of region.
STEAMSPY_CURRENCY = "USD"


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def normalize_store_details(details: StoreAppDetails) -> NormalizedRecord:
    """Map a Store appdetails payload to a full-detail record.

    Tags, website fields and the SteamSpy statistics stay unset; they are
    filled by `merge_steamspy_into_record` and the website side channel.
    """
    price = details.price_overview
    price_final = price.final if price else None

    # A positive final price wins over a stale is_free flag.
    is_free = details.is_free and not (price_final is not None and price_final > 0)

    return NormalizedRecord(
        appid=details.steam_appid,
        name=details.name,
        app_type=details.type or None,
        header_image=details.header_image or None,
        short_description=details.short_description or None,
        developers=list(details.developers or []),
        publishers=list(details.publishers or []),
        genres=[g.description for g in details.genres or [] if g.description],
        tags=[],
        release_date=details.release_date.date or None,
        coming_soon=details.release_date.coming_soon,
        price_initial_cents=price.initial if price else None,
        price_final_cents=price_final,
        discount_percent=price.discount_percent if price else None,
        currency=price.currency if price else None,
        is_free=is_free,
        platform_windows=details.platforms.windows,
        platform_mac=details.platforms.mac,
        platform_linux=details.platforms.linux,
        metacritic_score=details.metacritic.score if details.metacritic else None,
        recommendations=(
            details.recommendations.total if details.recommendations else None
        ),
        detail_level=DetailLevel.FULL,
    )


def normalize_steamspy_data(data: SteamSpyAppData) -> NormalizedRecord:
    """Map a SteamSpy payload to a lower-confidence, SteamSpy-only record.

    Release and platform fields are not provided by SteamSpy and stay ``None``.
    """
    price_final = _parse_int(data.price)

    return NormalizedRecord(
        appid=data.appid,
        name=(data.name or "").strip(),
        header_image=HEADER_IMAGE_URL.format(appid=data.appid),
        developers=_split_list(data.developer),
        publishers=_split_list(data.publisher),
        genres=_split_list(data.genre),
        tags=list(data.tags),
        price_initial_cents=_parse_int(data.initialprice),
        price_final_cents=price_final,
        discount_percent=_parse_int(data.discount),
        currency=STEAMSPY_CURRENCY if price_final is not None else None,
        is_free=(price_final == 0) if price_final is not None else None,
        owners=data.owners or None,
        ccu=data.ccu,
        positive_reviews=data.positive,
        negative_reviews=data.negative,
        average_playtime=data.average_forever,
        detail_level=DetailLevel.STEAMSPY,
    )


def merge_steamspy_into_record(
    record: NormalizedRecord, data: SteamSpyAppData
) -> NormalizedRecord:
    """Overlay SteamSpy tags and usage statistics onto a Store record.

    Store-only fields are never touched. Applying the same data twice yields
    the same record.
    """
    return record.model_copy(
        update={
            "tags": list(data.tags),
            "owners": data.owners or None,
            "ccu": data.ccu,
            "positive_reviews": data.positive,
            "negative_reviews": data.negative,
            "average_playtime": data.average_forever,
            "detail_level": DetailLevel.FULL,
        }
    )


def minimal_record(appid: int, name: str) -> NormalizedRecord:
    """Identity-only record, used for app list search hits."""
    return NormalizedRecord(appid=appid, name=name, detail_level=DetailLevel.MINIMAL)
