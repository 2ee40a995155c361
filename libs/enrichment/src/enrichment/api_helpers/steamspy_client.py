"""SteamSpy client (secondary provider).

Per-app lookups (``request=appdetails``) go through the cached `fetch` path.
Bulk listings (top 100, by genre, by tag) are never cached and propagate
provider errors to the caller.
"""

import logging
from typing import Any

from common.models.provider_models import SteamSpyAppData
from pydantic import ValidationError

from enrichment.api_helpers.provider_client import ProviderClient
from enrichment.exceptions import InvalidRequestError, UpstreamMalformedError

logger = logging.getLogger(__name__)

# Bulk mode -> name of the query parameter carrying its value (None: no value).
BULK_MODES: dict[str, str | None] = {
    "top100in2weeks": None,
    "top100forever": None,
    "genre": "genre",
    "tag": "tag",
}


class SteamSpyClient(ProviderClient[int, SteamSpyAppData]):
    """Client for the SteamSpy ``api.php`` endpoint."""

    @property
    def _endpoint(self) -> str:
        return f"{self._context.base_url}/api.php"

    async def _download(self, key: int) -> Any:
        return await self._get_json(
            self._endpoint, params={"request": "appdetails", "appid": str(key)}
        )

    def _parse(self, key: int, payload: Any) -> SteamSpyAppData | None:
        if not isinstance(payload, dict):
            raise UpstreamMalformedError(self.name, "expected a JSON object")
        # Unknown appids come back as a skeleton record with appid 0.
        data = SteamSpyAppData.model_validate({**payload, "appid": key})
        if data.is_unknown:
            return None
        return data

    async def fetch_bulk(self, mode: str, value: str | None = None) -> list[SteamSpyAppData]:
        """Return one SteamSpy bulk listing.

        Args:
            mode: One of `BULK_MODES`.
            value: Genre or tag name for the ``genre`` and ``tag`` modes.

        Returns:
            Listed apps in the order SteamSpy returned them. Rows that fail
            validation or carry no name are skipped.

        Raises:
            InvalidRequestError: Unknown mode or a missing value.
            UpstreamUnavailableError: On transport failure or non-200.
            UpstreamMalformedError: If the listing is not a JSON object.
        """
        if mode not in BULK_MODES:
            raise InvalidRequestError(
                f"Unknown browse mode '{mode}'. Must be one of: {', '.join(BULK_MODES)}"
            )

        params = {"request": mode}
        value_param = BULK_MODES[mode]
        if value_param is not None:
            if not value or not value.strip():
                raise InvalidRequestError(f"Browse mode '{mode}' requires a value")
            params[value_param] = value.strip()

        payload = await self._get_json(self._endpoint, params=params)
        if not isinstance(payload, dict):
            raise UpstreamMalformedError(self.name, "bulk listing is not a JSON object")

        apps: list[SteamSpyAppData] = []
        skipped = 0
        for raw in payload.values():
            try:
                data = SteamSpyAppData.model_validate(raw)
            except ValidationError:
                skipped += 1
                continue
            if data.is_unknown:
                skipped += 1
                continue
            apps.append(data)

        if skipped:
            logger.warning("%s bulk '%s': skipped %d invalid rows", self.name, mode, skipped)
        logger.info("%s bulk '%s' returned %d apps", self.name, mode, len(apps))
        return apps
