"""
Root test configuration for all tests.

Provides deterministic clocks, isolated settings and fake aiohttp sessions so
no test touches the network.
"""

import os
from collections.abc import Callable
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from common.config.settings import Settings
from provider_payloads import FakeClock, make_cm, make_response


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Generator[Settings, None, None]:
    """
    Provide development settings isolated from the caller's environment.

    Yields:
        Settings: A fresh (not lru-cached) settings instance.
    """
    with patch.dict(os.environ, {"APP_ENV": "development"}, clear=True):
        yield Settings(_env_file=None)


@pytest.fixture
def json_session() -> Callable[..., MagicMock]:
    """
    Build a fake aiohttp session answering successive GETs with the given payloads.

    Returns:
        Callable: ``json_session(payload, ...)`` -> session whose ``get`` yields
        one 200 response per payload, in order.
    """

    def _build(*payloads: Any) -> MagicMock:
        session = MagicMock()
        session.get = MagicMock(
            side_effect=[make_cm(make_response(p)) for p in payloads]
        )
        return session

    return _build
