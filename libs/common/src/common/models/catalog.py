"""Normalized catalog record shared by every Steamer service and client."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DetailLevel(str, Enum):
    """Which providers contributed to a record."""

    MINIMAL = "minimal"  # identity only
    STEAMSPY = "steamspy"  # secondary provider only
    FULL = "full"  # primary provider, secondary merged when available


class NormalizedRecord(BaseModel):
    """One catalog entry, unified across the Store and SteamSpy providers.

    Every field that is not known is ``None``; nothing is filled with a guessed
    default. On the wire the record uses camelCase keys (``priceFinalCents``,
    ``detailLevel``); Python code uses the snake_case attribute names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Identity
    appid: int = Field(..., description="Steam application id")
    name: str = Field(..., description="Display name")
    app_type: str | None = Field(
        None, alias="type", description="Canonical type (game, dlc, demo, ...)"
    )

    # Media & description
    header_image: str | None = Field(None, description="Header image URL")
    short_description: str | None = Field(None, description="Short description")

    # People & classification
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    # Release
    release_date: str | None = Field(None, description="Release date as published")
    coming_soon: bool | None = Field(None, description="Not yet released")

    # Pricing (integer minor currency units)
    price_initial_cents: int | None = None
    price_final_cents: int | None = None
    discount_percent: int | None = None
    currency: str | None = None
    is_free: bool | None = None

    # Platforms
    platform_windows: bool | None = None
    platform_mac: bool | None = None
    platform_linux: bool | None = None

    # Quality signals
    metacritic_score: int | None = None
    recommendations: int | None = None
    owners: str | None = Field(None, description="Owner-count bucket, e.g. '1,000,000 .. 2,000,000'")
    ccu: int | None = Field(None, description="Peak concurrent users")
    positive_reviews: int | None = None
    negative_reviews: int | None = None
    average_playtime: int | None = Field(None, description="Average playtime in minutes")

    # Websites
    website_url: str | None = None
    developer_website: str | None = None
    publisher_website: str | None = None

    detail_level: DetailLevel = Field(..., description="Contributing providers")

    def to_wire(self) -> dict:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)


class AppListEntry(BaseModel):
    """One row of the full Steam app list."""

    appid: int
    name: str
