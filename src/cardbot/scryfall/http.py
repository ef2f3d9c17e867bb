"""HTTP request handling for the Scryfall client."""

import httpx
import logging
from typing import Optional, Dict, Any

from .. import __version__

logger = logging.getLogger("cardbot.scryfall.http")

DEFAULT_HEADERS = {
    "User-Agent": f"cardbot/{__version__}",
    "Accept": "application/json;q=0.9,*/*;q=0.8",
}


class HTTPMixin:
    """Issues single-shot GET requests on a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http
        self._owns_http = http is None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(headers=DEFAULT_HEADERS, follow_redirects=True)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def _get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        GET a URL (absolute, or a path relative to ``base_url``).

        There is no retry loop: callers decide what a failure means.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
            httpx.TransportError: On connection problems and timeouts
        """
        if url.startswith("/"):
            url = f"{self.base_url}{url}"

        resp = await self.http.get(
            url,
            params=params,
            timeout=timeout if timeout is not None else self.timeout,
            follow_redirects=True,
        )
        if resp.is_error:
            logger.debug(f"GET {url} -> {resp.status_code}")
        resp.raise_for_status()
        return resp
