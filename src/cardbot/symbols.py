"""
Mana and other card symbols rendered as Discord custom emoji.

Bots can use custom emoji globally, so the Manamoji set is referenced by
``name:id`` (hosted on the bot's emoji server).
See https://github.com/scryfall/thopter/tree/master/manamoji
"""

import re
from typing import Dict

MANAMOJIS: Dict[str, str] = {
    "0": "mana0:698866510541750282",
    "1": "mana1:698866510667710464",
    "2": "mana2:698866510361395222",
    "3": "mana3:698866510130839604",
    "4": "mana4:698866510449475654",
    "5": "mana5:698866510537424937",
    "6": "mana6:698866510461927494",
    "7": "mana7:698866510235697183",
    "8": "mana8:698866510583824384",
    "9": "mana9:698866510692876338",
    "10": "mana10:698866510675968050",
    "11": "mana11:698866510571241502",
    "12": "mana12:698866510566916206",
    "13": "mana13:698866510566916147",
    "14": "mana14:698866510441087067",
    "15": "mana15:698866510411595857",
    "16": "mana16:698866510533230602",
    "20": "mana20:698866510399275019",
    "w": "manaw:698866510495744060",
    "u": "manau:698866510269120522",
    "b": "manab:698866510415790140",
    "r": "manar:698866510172520529",
    "g": "manag:698866510353006602",
    "c": "manac:698866510357331988",
    "s": "manas:698866510273445928",
    "x": "manax:698866509786775674",
    "e": "manae:698866510138966027",
    "t": "manat:698866510042759242",
    "q": "manaq:698866510290223104",
    "chaos": "manachaos:698866510587756604",
    # hybrid
    "wu": "manawu:698866510181171230",
    "wb": "manawb:698866510277378128",
    "ub": "manaub:698866510281703454",
    "ur": "manaur:698866510214725652",
    "br": "manabr:698866510017593435",
    "bg": "manabg:698866510453669898",
    "rg": "manarg:698866510545944586",
    "rw": "manarw:698866510210400267",
    "gw": "managw:698866510365458552",
    "gu": "managu:698866510361395250",
    # two-or-colored
    "2w": "mana2w:698866510567047198",
    "2u": "mana2u:698866510482898955",
    "2b": "mana2b:698866510512390144",
    "2r": "mana2r:698866510567047208",
    "2g": "mana2g:698866510634025030",
    # phyrexian
    "wp": "manawp:698866510189297757",
    "up": "manaup:698866509975519304",
    "bp": "manabp:698866510726299668",
    "rp": "manarp:698866510374109194",
    "gp": "managp:698866510395080714",
}

_SYMBOL = re.compile(r"{[^}]+?}")
_CODE_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def emoji_for(symbol: str) -> str:
    """Emoji markup for one ``{...}`` symbol, or '' when there is none."""
    code = _CODE_CHARS.sub("", symbol).lower()
    emoji = MANAMOJIS.get(code)
    return f"<:{emoji}>" if emoji else ""


def render_symbols(text: str) -> str:
    """Replace every ``{W}``, ``{2/U}``, ``{T}``... with its emoji."""
    return _SYMBOL.sub(lambda match: emoji_for(match.group(0)), text)


def truncate(text: str, length: int = 256, separator: str = "<", omission: str = "...") -> str:
    """
    Shorten ``text`` to at most ``length`` characters, ending in ``omission``.

    The cut happens at the last ``separator`` that fits, so emoji markup is
    never split in half. Without one, the text is cut hard.
    """
    if len(text) <= length:
        return text

    end = length - len(omission)
    if end < 1:
        return omission[:length]

    result = text[:end]
    # already ends on a boundary when the next character starts a glyph
    if text.find(separator, end) != end:
        cut = result.rfind(separator)
        if cut > -1:
            result = result[:cut]
    return result + omission
