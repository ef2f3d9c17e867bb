"""Gatherer rulings: fetch the card page and extract the rulings table."""

import logging
from typing import List, Sequence

from bs4 import BeautifulSoup

from .models import RulingEntry
from .scryfall import ScryfallClient

logger = logging.getLogger("cardbot.rulings")

# Discord embed descriptions used to be capped at 2048; keep some headroom
MAX_RULINGS_LENGTH = 2040


def format_rulings(entries: Sequence[RulingEntry]) -> str:
    return "\n".join(entry.format() for entry in entries)


def _cell_text(cell) -> str:
    return " ".join(cell.get_text().split())


def parse_rulings(html: str, limit: int = MAX_RULINGS_LENGTH) -> List[RulingEntry]:
    """
    Parse the ``.rulingsTable`` rows of a Gatherer page.

    The joined output never exceeds ``limit`` characters. When a ruling does
    not fit, it is replaced by an ellipsis entry and parsing stops.
    """
    soup = BeautifulSoup(html, "html.parser")
    rulings: List[RulingEntry] = []

    for row in soup.select(".rulingsTable tr"):
        cells = row.find_all("td")
        if len(cells) < 2:
            continue

        rulings.append(RulingEntry(date=_cell_text(cells[0]), text=_cell_text(cells[1])))
        if len(format_rulings(rulings)) > limit:
            rulings[-1] = RulingEntry.ellipsis()
            # the marker itself may still tip a full page over the limit
            while len(rulings) > 1 and len(format_rulings(rulings)) > limit:
                del rulings[-2]
            break

    return rulings


class RulingsFetcher:
    """Loads and parses a Gatherer rulings page."""

    def __init__(self, client: ScryfallClient):
        self.client = client

    async def fetch(self, uri: str) -> List[RulingEntry]:
        html = await self.client.fetch_text(uri)
        rulings = parse_rulings(html)
        logger.debug(f"Parsed {len(rulings)} rulings from {uri}")
        return rulings
