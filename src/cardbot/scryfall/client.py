"""Scryfall API client."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import DEFAULT_API_URL
from .http import HTTPMixin

logger = logging.getLogger("cardbot.scryfall")


class ScryfallClient(HTTPMixin):
    """
    Thin async wrapper around the Scryfall endpoints the bot uses.

    Pass a shared ``httpx.AsyncClient`` to reuse connections across
    commands; otherwise the client creates and owns its own.
    """

    SEARCH_PATH = "/cards/search"
    NAMED_PATH = "/cards/named"

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        HTTPMixin.__init__(self, base_url, http=http, timeout=timeout)

    async def search(self, query: str) -> Dict[str, Any]:
        """Full-text search; returns a Scryfall ``list`` object."""
        resp = await self._get(self.SEARCH_PATH, params={"q": query})
        return resp.json()

    async def named_fuzzy(self, name: str) -> Dict[str, Any]:
        """Best single match for a (partial, misspelled) name."""
        resp = await self._get(self.NAMED_PATH, params={"fuzzy": name})
        return resp.json()

    async def fetch_text(self, url: str) -> str:
        """Fetch an arbitrary page (e.g. Gatherer) as text."""
        resp = await self._get(url)
        return resp.text
