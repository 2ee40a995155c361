"""Configuration package for the catalog service."""

from .provider_config import (
    AppListConfig,
    ProviderConfig,
    SteamSpyConfig,
    StoreConfig,
    WikidataConfig,
)
from .service_config import ServiceConfig
from .settings import Environment, Settings, get_environment, get_settings

__all__ = [
    "AppListConfig",
    "Environment",
    "ProviderConfig",
    "ServiceConfig",
    "Settings",
    "SteamSpyConfig",
    "StoreConfig",
    "WikidataConfig",
    "get_environment",
    "get_settings",
]
