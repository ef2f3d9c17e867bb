from typing import Callable, List

import httpx
import pytest

from cardbot.errors import NoResults, ServiceUnavailable
from cardbot.resolver import CardResolver
from cardbot.scryfall import ScryfallClient

from .conftest import scryfall_card

API = "https://api.scryfall.test"


def make_resolver(handler: Callable[[httpx.Request], httpx.Response]):
    requests: List[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return CardResolver(ScryfallClient(API, http=http)), requests, http


def not_found() -> httpx.Response:
    return httpx.Response(404, json={"object": "error", "status": 404, "code": "not_found"})


class TestCardResolver:
    @pytest.mark.asyncio
    async def test_search_hits_are_ranked(self) -> None:
        def handler(request):
            assert request.url.path == "/cards/search"
            return httpx.Response(
                200,
                json={
                    "object": "list",
                    "data": [
                        scryfall_card("Tarmogoyf"),
                        scryfall_card("Lhurgoyf"),
                        scryfall_card("Goyf"),
                    ],
                },
            )

        resolver, requests, http = make_resolver(handler)
        cards = await resolver.resolve("goyf")
        await http.aclose()

        assert [c.name for c in cards] == ["Goyf", "Lhurgoyf", "Tarmogoyf"]
        assert len(requests) == 1
        assert requests[0].url.params["q"] == "goyf include:extras"

    @pytest.mark.asyncio
    async def test_falls_back_to_fuzzy_once(self) -> None:
        def handler(request):
            if request.url.path == "/cards/search":
                return not_found()
            return httpx.Response(200, json=scryfall_card("Tarmogoyf"))

        resolver, requests, http = make_resolver(handler)
        cards = await resolver.resolve("tarmogoyff")
        await http.aclose()

        assert [c.name for c in cards] == ["Tarmogoyf"]
        assert [r.url.path for r in requests] == ["/cards/search", "/cards/named"]
        assert requests[1].url.params["fuzzy"] == "tarmogoyff"

    @pytest.mark.asyncio
    async def test_falls_back_on_transport_error(self) -> None:
        def handler(request):
            if request.url.path == "/cards/search":
                raise httpx.ConnectError("reset", request=request)
            return httpx.Response(200, json=scryfall_card("Island"))

        resolver, _, http = make_resolver(handler)
        cards = await resolver.resolve("island")
        await http.aclose()

        assert cards[0].name == "Island"

    @pytest.mark.asyncio
    async def test_empty_search_falls_back(self) -> None:
        def handler(request):
            if request.url.path == "/cards/search":
                return httpx.Response(200, json={"object": "list", "data": []})
            return httpx.Response(200, json=scryfall_card("Island"))

        resolver, requests, http = make_resolver(handler)
        cards = await resolver.resolve("island")
        await http.aclose()

        assert cards[0].name == "Island"
        assert len(requests) == 2

    @pytest.mark.asyncio
    async def test_no_results(self) -> None:
        resolver, requests, http = make_resolver(lambda request: not_found())

        with pytest.raises(NoResults) as exc_info:
            await resolver.resolve("xyzzy")
        await http.aclose()

        assert exc_info.value.query == "xyzzy"
        assert len(requests) == 2

    @pytest.mark.asyncio
    async def test_service_unavailable(self) -> None:
        resolver, _, http = make_resolver(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(ServiceUnavailable):
            await resolver.resolve("tarmogoyf")
        await http.aclose()

    @pytest.mark.asyncio
    async def test_fuzzy_transport_error_is_no_results(self) -> None:
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        resolver, _, http = make_resolver(handler)

        with pytest.raises(NoResults):
            await resolver.resolve("tarmogoyf")
        await http.aclose()
