"""
Card data model built from Scryfall card objects.

Records are frozen: paging and zooming never mutate them. Fields mirror the
Scryfall names, except ``set_code`` (Scryfall ``set``) and ``rulings_uri``
(the Gatherer page found under ``related_uris.gatherer``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class View(Enum):
    """Which flavor of embed a command asked for."""

    CARD = "card"
    PRICE = "price"
    RULING = "ruling"
    LEGAL = "legal"


@dataclass(frozen=True)
class ImageUris:
    small: Optional[str] = None
    normal: Optional[str] = None

    @classmethod
    def from_scryfall(cls, data: Optional[Dict[str, Any]]) -> Optional["ImageUris"]:
        if not data:
            return None
        return cls(small=data.get("small"), normal=data.get("normal"))


@dataclass(frozen=True)
class CardFace:
    """One face of a multi-faced card (transform, split, flip, ...)."""

    name: str = ""
    type_line: str = ""
    oracle_text: str = ""
    mana_cost: str = ""
    power: str = ""
    toughness: str = ""
    loyalty: str = ""
    colors: Tuple[str, ...] = ()
    image_uris: Optional[ImageUris] = None

    @classmethod
    def from_scryfall(cls, data: Dict[str, Any]) -> "CardFace":
        return cls(
            name=data.get("name") or "",
            type_line=data.get("type_line") or "",
            oracle_text=data.get("oracle_text") or "",
            mana_cost=data.get("mana_cost") or "",
            power=data.get("power") or "",
            toughness=data.get("toughness") or "",
            loyalty=data.get("loyalty") or "",
            colors=tuple(data.get("colors") or ()),
            image_uris=ImageUris.from_scryfall(data.get("image_uris")),
        )


@dataclass(frozen=True)
class CardRecord:
    """A single card (one printing) as returned by Scryfall."""

    name: str
    id: str = ""
    printed_name: str = ""
    type_line: str = ""
    printed_type_line: str = ""
    mana_cost: str = ""
    oracle_text: str = ""
    printed_text: str = ""
    flavor_text: str = ""
    power: str = ""
    toughness: str = ""
    loyalty: str = ""
    colors: Tuple[str, ...] = ()
    color_identity: Tuple[str, ...] = ()
    set_code: str = ""
    rarity: str = ""
    lang: str = "en"
    layout: str = "normal"
    scryfall_uri: Optional[str] = None
    rulings_uri: Optional[str] = None
    prices: Optional[Dict[str, Optional[str]]] = field(default=None, compare=False)
    legalities: Dict[str, str] = field(default_factory=dict, compare=False)
    card_faces: Tuple[CardFace, ...] = ()
    image_uris: Optional[ImageUris] = None

    @classmethod
    def from_scryfall(cls, data: Dict[str, Any]) -> "CardRecord":
        """Build a record from a Scryfall ``card`` JSON object."""
        related = data.get("related_uris") or {}
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            printed_name=data.get("printed_name") or "",
            type_line=data.get("type_line") or "",
            printed_type_line=data.get("printed_type_line") or "",
            mana_cost=data.get("mana_cost") or "",
            oracle_text=data.get("oracle_text") or "",
            printed_text=data.get("printed_text") or "",
            flavor_text=data.get("flavor_text") or "",
            power=data.get("power") or "",
            toughness=data.get("toughness") or "",
            loyalty=data.get("loyalty") or "",
            colors=tuple(data.get("colors") or ()),
            color_identity=tuple(data.get("color_identity") or ()),
            set_code=data.get("set") or "",
            rarity=data.get("rarity") or "",
            lang=data.get("lang") or "en",
            layout=data.get("layout") or "normal",
            scryfall_uri=data.get("scryfall_uri"),
            rulings_uri=related.get("gatherer"),
            prices=data.get("prices"),
            legalities=dict(data.get("legalities") or {}),
            card_faces=tuple(
                CardFace.from_scryfall(face) for face in data.get("card_faces") or ()
            ),
            image_uris=ImageUris.from_scryfall(data.get("image_uris")),
        )

    @property
    def display_name(self) -> str:
        """Printed (translated) name if there is one, else the English name."""
        return self.printed_name or self.name

    @property
    def is_transform(self) -> bool:
        return self.layout == "transform" and bool(self.card_faces)


@dataclass(frozen=True)
class RulingEntry:
    """One dated ruling. An entry without a date is the truncation marker."""

    date: str
    text: str

    ELLIPSIS_TEXT = "..."

    @classmethod
    def ellipsis(cls) -> "RulingEntry":
        return cls(date="", text=cls.ELLIPSIS_TEXT)

    @property
    def is_ellipsis(self) -> bool:
        return not self.date and self.text == self.ELLIPSIS_TEXT

    def format(self) -> str:
        if self.is_ellipsis:
            return self.text
        return f"**{self.date}:** {self.text}"
