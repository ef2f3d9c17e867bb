"""
Turn card records into Discord embeds.

``build_embed`` is synchronous and covers every view except the Gatherer
rulings, which ``render_embed`` fetches and patches in afterwards.
"""

import logging
import re
from typing import List, Optional, Sequence, Union

import discord
import httpx

from .errors import RenderFailure
from .models import CardFace, CardRecord, ImageUris, View
from .rulings import RulingsFetcher, format_rulings
from .symbols import render_symbols, truncate

logger = logging.getLogger("cardbot.presentation")

TITLE_LIMIT = 256
FOOTER_NAMES = 5

# embed border colors depending on card color(s)
COLORS = {
    "W": 0xF8F6D8,
    "U": 0xC1D7E9,
    "B": 0x0D0F0F,
    "R": 0xE49977,
    "G": 0xA3C095,
    "GOLD": 0xE0C96C,
    "ARTIFACT": 0x90ADBB,
    "LAND": 0xAA8F84,
    "NONE": 0xDAD9DE,
}
ERROR_COLOR = 0xFF0000

_OPEN_PAREN = re.compile(r"(?<!\*)\(")
_CLOSE_PAREN = re.compile(r"\)(?!\*)")


def italicize_reminders(text: str) -> str:
    """Wrap parenthesized reminder text in italics: ``(x)`` -> ``*(x)*``."""
    text = _OPEN_PAREN.sub("*(", text)
    return _CLOSE_PAREN.sub(")*", text)


def _power_toughness(card: Union[CardRecord, CardFace]) -> str:
    power = card.power.replace("*", "\\*")
    toughness = card.toughness.replace("*", "\\*")
    return f"**{power}/{toughness}**"


def border_color(card: Union[CardRecord, CardFace]) -> int:
    """Pick the embed color from the card's colors, or its type when colorless."""
    if not card.colors:
        color = COLORS["NONE"]
        if re.search("artifact", card.type_line, re.IGNORECASE):
            color = COLORS["ARTIFACT"]
        if re.search("land", card.type_line, re.IGNORECASE):
            color = COLORS["LAND"]
        return color
    if len(card.colors) > 1:
        return COLORS["GOLD"]
    return COLORS.get(card.colors[0], COLORS["NONE"])


def card_image(card: CardRecord) -> Optional[ImageUris]:
    """Transform cards show their front face image."""
    if card.is_transform:
        return card.card_faces[0].image_uris
    return card.image_uris


def build_title(card: CardRecord) -> str:
    title = card.display_name
    if card.mana_cost:
        title += " " + card.mana_cost
    if card.is_transform and card.card_faces[0].mana_cost:
        title += " " + card.card_faces[0].mana_cost
    return title


def build_description(card: CardRecord) -> str:
    """Type line, rules text, flavor, loyalty and P/T, then one block per face."""
    description: List[str] = []

    type_line = card.printed_type_line or card.type_line
    if type_line:
        flag = f" :flag_{card.lang}:" if card.lang and card.lang != "en" else ""
        description.append(
            f"**{type_line}** ({card.set_code.upper()} {card.rarity.capitalize()}{flag})"
        )

    text = card.printed_text or card.oracle_text
    if text:
        description.append(italicize_reminders(text))
    if card.flavor_text:
        description.append(f"*{card.flavor_text}*")
    if card.loyalty:
        description.append(f"**Loyalty: {card.loyalty}**")
    if card.power:
        description.append(_power_toughness(card))

    if card.card_faces and not card.is_transform:
        for face in card.card_faces:
            description.append(f"**{face.type_line}**")
            if face.oracle_text:
                description.append(italicize_reminders(face.oracle_text))
            if face.power:
                description.append(_power_toughness(face))
            description.append("")

    return "\n".join(description)


def build_footer(cards: Sequence[CardRecord], prefix: str = "!") -> str:
    if len(cards) <= 1:
        return f"Use {prefix}help to get a list of available commands."

    footer = f"{len(cards) - 1} other hits:\n"
    footer += "; ".join(card.display_name for card in cards[1 : FOOTER_NAMES + 1])
    if len(cards) > FOOTER_NAMES + 1:
        footer += "; ..."
    return footer


def format_prices(card: CardRecord) -> str:
    prices = card.prices or {}
    parts = []
    if prices.get("usd"):
        parts.append(f"${prices['usd']}")
    if prices.get("usd_foil"):
        parts.append(f"**Foil** ${prices['usd_foil']}")
    if prices.get("eur"):
        parts.append(f"{prices['eur']}€")
    if prices.get("tix"):
        parts.append(f"{prices['tix']} Tix")
    return " / ".join(parts) or "No prices found"


def format_legalities(card: CardRecord) -> str:
    legal = [fmt.capitalize() for fmt, status in card.legalities.items() if status == "legal"]
    return ", ".join(legal) or "Nowhere"


def build_embed(
    cards: Sequence[CardRecord],
    view: View = View.CARD,
    allow_symbols: bool = False,
    zoom: bool = False,
    prefix: str = "!",
) -> discord.Embed:
    """
    Build the embed for the first card in ``cards``.

    Args:
        cards: Ordered hits; the first is shown, the rest fill the footer
        view: Which extra field (prices, legalities) to add
        allow_symbols: Whether custom emoji may replace ``{X}`` symbols
        zoom: Show the large image instead of only the thumbnail
        prefix: Command prefix shown in the help hint

    Raises:
        RenderFailure: Any unexpected problem with the card data
    """
    if not cards:
        raise RenderFailure("Nothing to render")
    card = cards[0]

    try:
        title = build_title(card)
        description = build_description(card)

        # custom emoji are allowed, so use them but make sure the title still fits
        if allow_symbols:
            title = truncate(render_symbols(title), TITLE_LIMIT, separator="<")
            description = render_symbols(description)

        embed = discord.Embed(
            title=title,
            description=description,
            url=card.scryfall_uri,
            color=border_color(card.card_faces[0] if card.is_transform else card),
        )
        embed.set_footer(text=build_footer(cards, prefix))

        image = card_image(card)
        if image and image.small:
            embed.set_thumbnail(url=image.small)
        if zoom and image and image.normal:
            embed.set_image(url=image.normal)

        if view is View.PRICE and card.prices is not None:
            embed.add_field(name="Prices", value=format_prices(card), inline=False)
        if view is View.LEGAL:
            embed.add_field(name="Legal in", value=format_legalities(card), inline=False)
    except RenderFailure:
        raise
    except Exception as e:
        raise RenderFailure(f"Could not render {card.name!r}: {e}", card.name) from e

    return embed


async def render_embed(
    cards: Sequence[CardRecord],
    view: View = View.CARD,
    allow_symbols: bool = False,
    zoom: bool = False,
    prefix: str = "!",
    rulings: Optional[RulingsFetcher] = None,
) -> discord.Embed:
    """``build_embed`` plus Gatherer rulings for the ruling view."""
    embed = build_embed(cards, view, allow_symbols=allow_symbols, zoom=zoom, prefix=prefix)

    card = cards[0]
    if view is not View.RULING or not card.rulings_uri or rulings is None:
        return embed

    try:
        entries = await rulings.fetch(card.rulings_uri)
    except httpx.HTTPError as e:
        logger.warning(f"Could not load rulings for {card.name}: {e}")
        return embed

    embed.set_author(name="Gatherer rulings for")
    embed.description = format_rulings(entries)
    return embed


def error_embed(description: str) -> discord.Embed:
    return discord.Embed(title="Error", description=description, color=ERROR_COLOR)
