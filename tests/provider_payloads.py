"""Canned provider payloads and fake aiohttp plumbing shared by the tests."""

from typing import Any
from unittest.mock import AsyncMock


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_cm(response: Any) -> AsyncMock:
    """Wrap a fake response in the async context manager `session.get` returns."""
    cm = AsyncMock()
    cm.__aenter__ = AsyncMock(return_value=response)
    cm.__aexit__ = AsyncMock(return_value=None)
    return cm


def make_response(payload: Any = None, *, status: int = 200) -> AsyncMock:
    resp = AsyncMock()
    resp.status = status
    resp.json = AsyncMock(return_value=payload)
    return resp


def store_details(appid: int = 620, **overrides: Any) -> dict[str, Any]:
    """Return a Store appdetails ``data`` object resembling a real response."""
    data: dict[str, Any] = {
        "type": "game",
        "name": "Portal 2",
        "steam_appid": appid,
        "is_free": False,
        "short_description": "The sequel to Portal.",
        "header_image": f"https://cdn.akamai.steamstatic.com/steam/apps/{appid}/header.jpg",
        "website": "http://www.thinkwithportals.com/",
        "developers": ["Valve"],
        "publishers": ["Valve"],
        "price_overview": {
            "currency": "USD",
            "initial": 999,
            "final": 199,
            "discount_percent": 80,
            "final_formatted": "$1.99",
        },
        "platforms": {"windows": True, "mac": True, "linux": True},
        "metacritic": {"score": 95, "url": "https://www.metacritic.com/game/portal-2"},
        "genres": [{"id": "1", "description": "Action"}, {"id": 25, "description": "Adventure"}],
        "recommendations": {"total": 250000},
        "release_date": {"coming_soon": False, "date": "18 Apr, 2011"},
    }
    data.update(overrides)
    return data


def store_envelope(appid: int = 620, **overrides: Any) -> dict[str, Any]:
    return {str(appid): {"success": True, "data": store_details(appid, **overrides)}}


def steamspy_app(appid: int = 620, **overrides: Any) -> dict[str, Any]:
    """Return a SteamSpy appdetails payload resembling a real response."""
    data: dict[str, Any] = {
        "appid": appid,
        "name": "Portal 2",
        "developer": "Valve",
        "publisher": "Valve",
        "score_rank": "",
        "positive": 300000,
        "negative": 3000,
        "userscore": 0,
        "owners": "10,000,000 .. 20,000,000",
        "average_forever": 1200,
        "average_2weeks": 60,
        "median_forever": 600,
        "median_2weeks": 30,
        "price": "999",
        "initialprice": "999",
        "discount": "0",
        "ccu": 5000,
        "languages": "English, French",
        "genre": "Action, Adventure",
        "tags": {"Puzzle": 5000, "Co-op": 4000, "First-Person": 3000},
    }
    data.update(overrides)
    return data
