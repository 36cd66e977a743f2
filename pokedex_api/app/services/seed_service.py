"""
Service that repopulates the Pokemon collection from PokeAPI.

The seed downloads the species list from ``{pokeapi_url}/pokemon`` and
replaces the contents of the collection with one ``{name, no}``
document per entry.  The Pokedex number is taken from the resource URL
(``.../pokemon/25/`` -> ``25``).  Intended for development databases;
every existing document is deleted first.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from pokedex_api.app.core.exceptions import UpstreamError
from pokedex_api.app.schemas.seed import SeedResult
from pokedex_api.app.services.pokemon_service import VERSION_FIELD


class SeedService:
    """Fetch Pokemon from PokeAPI and store them."""

    def __init__(
        self,
        collection,
        pokeapi_url: str,
        limit: int,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.collection = collection
        self.pokeapi_url = pokeapi_url.rstrip("/")
        self.limit = limit
        # Tests pass a client backed by ``httpx.MockTransport``.
        self.http_client = http_client

    async def populate(self) -> SeedResult:
        """Replace the collection with a fresh copy of the PokeAPI list.

        The payload is fully validated before anything is deleted, so a
        failed or malformed response leaves the collection untouched.
        """
        logger = logging.getLogger(__name__)
        payload = await self._fetch_payload()
        try:
            documents = self._to_documents(payload["results"])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Malformed PokeAPI response: %r", exc)
            raise UpstreamError("PokeAPI returned an unexpected Pokemon list") from exc

        await self.collection.delete_many({})
        if documents:
            await self.collection.insert_many(documents)
        logger.info("Seeded %d Pokemon from %s", len(documents), self.pokeapi_url)
        return SeedResult(message="Seed executed", inserted=len(documents))

    async def _fetch_payload(self) -> Any:
        url = f"{self.pokeapi_url}/pokemon"
        params = {"limit": self.limit}
        try:
            if self.http_client is not None:
                response = await self.http_client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=30) as client:
                    response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logging.getLogger(__name__).error("PokeAPI request failed: %s", exc)
            raise UpstreamError("Could not fetch Pokemon from PokeAPI") from exc

    @staticmethod
    def _to_documents(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Build insertable documents from PokeAPI ``results`` entries.

        Raises ``KeyError``, ``TypeError``, ``ValueError`` or
        ``AttributeError`` for entries without a usable name or URL.
        """
        documents = []
        for item in results:
            segments = item["url"].rstrip("/").split("/")
            documents.append(
                {
                    "name": item["name"].lower(),
                    "no": int(segments[-1]),
                    VERSION_FIELD: 0,
                }
            )
        return documents
