"""Enrichment library for Steam catalog data.

This library contains all acquisition code including:
- Rate-limited, cached clients for the Steam Store, SteamSpy and Wikidata
- Normalization of provider payloads into catalog records
- The streaming enrichment orchestrator and its CLI
"""

__all__ = ["normalization"]
