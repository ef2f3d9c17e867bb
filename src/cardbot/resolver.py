"""Resolve a free-text query to an ordered list of cards."""

import logging
from typing import Tuple

import httpx

from .errors import NoResults, ServiceUnavailable
from .models import CardRecord
from .scoring import sort_hits
from .scryfall import ScryfallClient

logger = logging.getLogger("cardbot.resolver")

EXTRAS_DIRECTIVE = "include:extras"


class CardResolver:
    """Search Scryfall, falling back to a fuzzy name lookup once."""

    def __init__(self, client: ScryfallClient):
        self.client = client

    async def resolve(self, query: str) -> Tuple[CardRecord, ...]:
        """
        Return the cards matching ``query``, best match first.

        Raises:
            ServiceUnavailable: The fuzzy fallback got a 503
            NoResults: Nothing matched, or the fallback failed otherwise
        """
        try:
            body = await self.client.search(f"{query} {EXTRAS_DIRECTIVE}")
            hits = [CardRecord.from_scryfall(card) for card in body.get("data") or []]
            if hits:
                return tuple(sort_hits(hits, query))
            logger.info(f"Search for {query!r} returned no data")
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Search for {query!r} failed: {e}")

        logger.info(f"Falling back to fuzzy search for {query}")
        try:
            body = await self.client.named_fuzzy(query)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 503:
                raise ServiceUnavailable(e.response.status_code) from e
            raise NoResults(query) from e
        except (httpx.HTTPError, ValueError) as e:
            raise NoResults(query) from e

        return (CardRecord.from_scryfall(body),)
