"""
Type models for raw provider payloads (Steam Store appdetails, SteamSpy,
Wikidata).

Only the fields normalization needs are modelled. Fields a provider always
sends are required, so a payload missing them fails validation and is treated
as malformed instead of being silently defaulted. Unmodelled keys are dropped
to keep cached entries small.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


# =============================================================================
# Steam Store: /api/appdetails?appids={id}
# =============================================================================


class StorePriceOverview(BaseModel):
    model_config = ConfigDict(extra="ignore")

    currency: str
    initial: int
    final: int
    discount_percent: int = 0


class StorePlatforms(BaseModel):
    model_config = ConfigDict(extra="ignore")

    windows: bool
    mac: bool
    linux: bool


class StoreGenre(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    description: str


class StoreReleaseDate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    coming_soon: bool
    date: str = ""


class StoreMetacritic(BaseModel):
    model_config = ConfigDict(extra="ignore")

    score: int
    url: str | None = None


class StoreRecommendations(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int


class StoreAppDetails(BaseModel):
    """The ``data`` object of a successful appdetails response."""

    model_config = ConfigDict(extra="ignore")

    type: str
    name: str
    steam_appid: int
    is_free: bool
    platforms: StorePlatforms
    release_date: StoreReleaseDate
    short_description: str | None = None
    header_image: str | None = None
    developers: list[str] | None = None
    publishers: list[str] | None = None
    price_overview: StorePriceOverview | None = None
    genres: list[StoreGenre] | None = None
    metacritic: StoreMetacritic | None = None
    recommendations: StoreRecommendations | None = None
    website: str | None = None

    @field_validator("genres", mode="before")
    @classmethod
    def coerce_genre_ids(cls, v: Any) -> Any:
        # Store genre ids arrive as strings or ints depending on the app.
        if isinstance(v, list):
            return [
                {**g, "id": str(g.get("id", ""))} if isinstance(g, dict) else g
                for g in v
            ]
        return v


class StoreAppDetailsEnvelope(BaseModel):
    """Per-appid wrapper: ``{"<appid>": {"success": bool, "data": {...}}}``."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    data: StoreAppDetails | None = None


# =============================================================================
# Steam Web API: ISteamApps/GetAppList/v2
# =============================================================================


class StoreAppListApp(BaseModel):
    model_config = ConfigDict(extra="ignore")

    appid: int
    name: str


class StoreAppListBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    apps: list[StoreAppListApp]


class StoreAppListResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    applist: StoreAppListBody


# =============================================================================
# SteamSpy: api.php?request=appdetails&appid={id} and bulk listings
# =============================================================================


class SteamSpyAppData(BaseModel):
    """One SteamSpy app. Bulk listings omit ``genre``, ``tags`` and ``languages``."""

    model_config = ConfigDict(extra="ignore")

    appid: int
    name: str | None = None
    developer: str | None = None
    publisher: str | None = None
    owners: str | None = None
    positive: int | None = None
    negative: int | None = None
    userscore: int | None = None
    average_forever: int | None = None
    average_2weeks: int | None = None
    median_forever: int | None = None
    median_2weeks: int | None = None
    ccu: int | None = None
    price: str | None = None
    initialprice: str | None = None
    discount: str | None = None
    languages: str | None = None
    genre: str | None = None
    tags: dict[str, int] = Field(default_factory=dict)

    @field_validator("price", "initialprice", "discount", mode="before")
    @classmethod
    def stringify_numbers(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return v
        if isinstance(v, int | float):
            return str(int(v))
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def empty_tag_list(cls, v: Any) -> Any:
        # SteamSpy encodes "no tags" as an empty JSON array.
        if v is None or v == []:
            return {}
        return v

    @property
    def is_unknown(self) -> bool:
        """SteamSpy answers unknown appids with a record whose name is null."""
        return not (self.name and self.name.strip())


# =============================================================================
# Wikidata: w/api.php?action=wbsearchentities and Special:EntityData/{id}.json
# =============================================================================


class WikidataSearchHit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class WikidataSearchResponse(BaseModel):
    """``wbsearchentities`` result; only the best hit is used."""

    model_config = ConfigDict(extra="ignore")

    search: list[WikidataSearchHit] = Field(default_factory=list)


class WikidataDataValue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Any = None


class WikidataSnak(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Absent for "no value" and "unknown value" snaks.
    datavalue: WikidataDataValue | None = None


class WikidataClaim(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mainsnak: WikidataSnak


_CLAIM_LIST = TypeAdapter(list[WikidataClaim])


class WikidataEntity(BaseModel):
    """One entity from ``Special:EntityData``.

    Claims for other properties are kept unparsed; only the property asked
    for in `string_values` is validated.
    """

    model_config = ConfigDict(extra="ignore")

    claims: dict[str, Any] = Field(default_factory=dict)

    @field_validator("claims", mode="before")
    @classmethod
    def empty_claim_list(cls, v: Any) -> Any:
        # Entities without claims serialize them as an empty JSON array.
        if v is None or v == []:
            return {}
        return v

    def string_values(self, prop: str) -> list[str]:
        """Non-blank string values of `prop`, in claim order.

        Raises:
            pydantic.ValidationError: If the claims for `prop` are malformed.
        """
        claims = _CLAIM_LIST.validate_python(self.claims.get(prop) or [])
        values = []
        for claim in claims:
            datavalue = claim.mainsnak.datavalue
            if datavalue is not None and isinstance(datavalue.value, str):
                value = datavalue.value.strip()
                if value:
                    values.append(value)
        return values


class WikidataEntityDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entities: dict[str, WikidataEntity] = Field(default_factory=dict)
