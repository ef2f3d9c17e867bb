"""Error taxonomy for card lookups and rendering."""

from typing import Optional


class CardLookupError(Exception):
    """Base class for failures while resolving a query to cards."""


class NoResults(CardLookupError):
    """Neither the search nor the fuzzy fallback returned a card."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No cards matched {query!r}")


class ServiceUnavailable(CardLookupError):
    """Scryfall answered with a 503."""

    def __init__(self, status_code: int = 503):
        self.status_code = status_code
        super().__init__(f"Scryfall unavailable (HTTP {status_code})")


class RenderFailure(Exception):
    """Unexpected fault while assembling an embed."""

    def __init__(self, message: str, card_name: Optional[str] = None):
        self.card_name = card_name
        super().__init__(message)
