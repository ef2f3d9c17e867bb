"""
Relevance scoring for search hits.

Scryfall orders search results by its own criteria, which often puts the
card the user meant somewhere in the middle. These helpers re-rank the hits
against the words the user actually typed.
"""

import re
from typing import Iterable, List

from .models import CardRecord

EXACT_MATCH_SCORE = 10000
PREFIX_WEIGHT = 1000
SUBSTRING_WEIGHT = 100

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_OPERATOR = re.compile(r"[=:()><]")


def _squash(text: str) -> str:
    return _NON_ALNUM.sub("", text.lower())


def normalize_name(card: CardRecord) -> str:
    return _squash(card.display_name)


def normalize_query(query: str) -> str:
    """Strip search operators (``t:creature``, ``cmc>3``, ...) and squash the rest."""
    words = [word for word in query.split(" ") if not _OPERATOR.search(word)]
    return _squash(" ".join(words))


def score_hit(card: CardRecord, query: str) -> float:
    """
    Score how well a card name matches the query; higher is better.

    Exact matches get a flat top score. Otherwise the score is the share of
    the name covered by the query, weighted up when the name starts with it.
    """
    name = normalize_name(card)
    name_query = normalize_query(query)

    if name == name_query:
        return EXACT_MATCH_SCORE
    if not name:
        return 0
    if name.startswith(name_query):
        return PREFIX_WEIGHT * len(name_query) / len(name)
    return SUBSTRING_WEIGHT * len(name_query) / len(name)


def sort_hits(cards: Iterable[CardRecord], query: str) -> List[CardRecord]:
    """Sort best match first; ties keep the API order (``sorted`` is stable)."""
    return sorted(cards, key=lambda card: score_hit(card, query), reverse=True)
