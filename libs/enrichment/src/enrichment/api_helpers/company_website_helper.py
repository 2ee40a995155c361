"""Company official-website lookup via Wikidata.

Resolves a developer or publisher name to its official website in two
requests against the same budget:
1. ``wbsearchentities`` to find the best-matching entity id.
2. ``Special:EntityData/<id>.json`` to read the official website claim (P856).
"""

import asyncio
import logging
from typing import Any

from common.models.provider_models import (
    WikidataEntityDocument,
    WikidataSearchResponse,
)

from enrichment.api_helpers.provider_client import ProviderClient

logger = logging.getLogger(__name__)

OFFICIAL_WEBSITE_PROPERTY = "P856"


class CompanyWebsiteResolver(ProviderClient[str, str]):
    """Resolve company names to official website URLs."""

    def _cache_key(self, key: str) -> str:
        return key.strip().lower()

    async def _download(self, key: str) -> Any:
        search = await self._get_json(
            f"{self._context.base_url}/w/api.php",
            params={
                "action": "wbsearchentities",
                "search": key.strip(),
                "language": "en",
                "type": "item",
                "limit": "1",
                "format": "json",
            },
        )
        hits = WikidataSearchResponse.model_validate(search).search
        if not hits or not hits[0].id:
            return None
        entity_id = hits[0].id

        entity = await self._get_json(
            f"{self._context.base_url}/wiki/Special:EntityData/{entity_id}.json"
        )
        return {"id": entity_id, "document": entity}

    def _parse(self, key: str, payload: Any) -> str | None:
        if payload is None:
            return None

        document = WikidataEntityDocument.model_validate(payload["document"])
        entity = document.entities.get(payload["id"])
        if entity is None:
            return None
        websites = entity.string_values(OFFICIAL_WEBSITE_PROPERTY)
        return websites[0] if websites else None

    async def resolve_pair(
        self, developer: str | None, publisher: str | None
    ) -> tuple[str | None, str | None]:
        """Look up developer and publisher websites concurrently.

        Blank names are skipped. A publisher identical to the developer reuses
        the developer's result.

        Returns:
            ``(developer_website, publisher_website)``
        """
        dev = developer.strip() if developer else ""
        pub = publisher.strip() if publisher else ""

        async def _lookup(name: str) -> str | None:
            return await self.fetch(name) if name else None

        if dev and dev.lower() == pub.lower():
            website = await _lookup(dev)
            return website, website

        dev_site, pub_site = await asyncio.gather(_lookup(dev), _lookup(pub))
        return dev_site, pub_site
