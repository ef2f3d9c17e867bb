from typing import Any, Dict

import pytest

from cardbot.models import CardRecord


def scryfall_card(name: str, **overrides: Any) -> Dict[str, Any]:
    """Minimal Scryfall card object; override any field."""
    data: Dict[str, Any] = {
        "object": "card",
        "id": f"id-{name.lower().replace(' ', '-')}",
        "name": name,
        "lang": "en",
        "layout": "normal",
        "type_line": "Creature — Lhurgoyf",
        "mana_cost": "{1}{G}",
        "oracle_text": "",
        "colors": ["G"],
        "color_identity": ["G"],
        "set": "fut",
        "rarity": "rare",
        "scryfall_uri": f"https://scryfall.com/card/fut/153/{name.lower()}",
        "image_uris": {
            "small": f"https://img.example/{name}/small.jpg",
            "normal": f"https://img.example/{name}/normal.jpg",
        },
        "prices": {"usd": None, "usd_foil": None, "eur": None, "tix": None},
        "legalities": {},
        "related_uris": {},
    }
    data.update(overrides)
    return data


def make_card(name: str, **overrides: Any) -> CardRecord:
    return CardRecord.from_scryfall(scryfall_card(name, **overrides))


@pytest.fixture
def tarmogoyf() -> CardRecord:
    return make_card(
        "Tarmogoyf",
        oracle_text=(
            "Tarmogoyf's power is equal to the number of card types among cards in all "
            "graveyards and its toughness is equal to that number plus 1."
        ),
        power="*",
        toughness="1+*",
        prices={"usd": "25.10", "usd_foil": "80.00", "eur": "19.50", "tix": "3.21"},
        legalities={"standard": "not_legal", "modern": "legal", "legacy": "legal"},
        related_uris={"gatherer": "https://gatherer.example/Card/Details.aspx?multiverseid=136142"},
    )


@pytest.fixture
def delver() -> CardRecord:
    """Transform card: no top-level image or mana cost, both live on the faces."""
    return make_card(
        "Delver of Secrets // Insectile Aberration",
        layout="transform",
        type_line="Creature — Human Wizard // Creature — Human Insect",
        mana_cost="",
        colors=[],
        image_uris=None,
        card_faces=[
            {
                "name": "Delver of Secrets",
                "type_line": "Creature — Human Wizard",
                "mana_cost": "{U}",
                "oracle_text": "At the beginning of your upkeep, look at the top card of your library.",
                "power": "1",
                "toughness": "1",
                "colors": ["U"],
                "image_uris": {
                    "small": "https://img.example/delver-front/small.jpg",
                    "normal": "https://img.example/delver-front/normal.jpg",
                },
            },
            {
                "name": "Insectile Aberration",
                "type_line": "Creature — Human Insect",
                "mana_cost": "",
                "oracle_text": "Flying",
                "power": "3",
                "toughness": "2",
                "colors": ["U"],
                "image_uris": {
                    "small": "https://img.example/delver-back/small.jpg",
                    "normal": "https://img.example/delver-back/normal.jpg",
                },
            },
        ],
        prices={"usd": "0.25", "usd_foil": None, "eur": "0.10", "tix": None},
    )
