"""
Reaction-driven paging over the hits of one sent message.

A ``PagerCursor`` is an immutable view of the hits: the original tuple, the
index of the card in front, and which cards are zoomed. Every action builds
a new cursor, so a render always works from a consistent snapshot.

``Pager`` owns the cursor for one message and re-renders it on each action
until it expires. ``PagerRegistry`` routes reaction events to pagers and
keeps at most one subscription per message.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, Optional, Tuple

import discord

from .models import CardRecord, View

logger = logging.getLogger("cardbot.pager")

DEFAULT_TIMEOUT = 5 * 60


class PagerAction(Enum):
    NEXT = "➡"
    PREVIOUS = "⬅"
    ZOOM = "🔍"

    @classmethod
    def from_emoji(cls, emoji) -> Optional["PagerAction"]:
        # clients may add the emoji variation selector
        try:
            return cls(str(emoji).replace("\ufe0f", ""))
        except ValueError:
            return None


class PagerStatus(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class PagerCursor:
    """Ring over the hits with a per-card zoom flag."""

    cards: Tuple[CardRecord, ...]
    offset: int = 0
    zoomed: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.cards:
            raise ValueError("PagerCursor needs at least one card")

    @property
    def front(self) -> CardRecord:
        return self.cards[self.offset]

    @property
    def zoom(self) -> bool:
        return self.offset in self.zoomed

    def ordered(self) -> Tuple[CardRecord, ...]:
        """Hits in display order, front card first."""
        return self.cards[self.offset :] + self.cards[: self.offset]

    def next(self) -> "PagerCursor":
        return replace(self, offset=(self.offset + 1) % len(self.cards))

    def previous(self) -> "PagerCursor":
        return replace(self, offset=(self.offset - 1) % len(self.cards))

    def toggle_zoom(self) -> "PagerCursor":
        return replace(self, zoomed=self.zoomed ^ {self.offset})

    def apply(self, action: PagerAction) -> "PagerCursor":
        if action is PagerAction.NEXT:
            return self.next()
        if action is PagerAction.PREVIOUS:
            return self.previous()
        return self.toggle_zoom()


# (ordered cards, view, allow_symbols, zoom) -> embed
Renderer = Callable[[Tuple[CardRecord, ...], View, bool, bool], Awaitable[discord.Embed]]


class Pager:
    """
    Interactive state for one rendered message.

    Only ``requester_id`` can drive it. Each accepted action re-arms the
    idle timer; once it fires the pager is expired and ignores everything.
    """

    def __init__(
        self,
        message,
        cards: Tuple[CardRecord, ...],
        requester_id: int,
        view: View,
        allow_symbols: bool,
        render: Renderer,
        timeout: float = DEFAULT_TIMEOUT,
        on_expire: Optional[Callable[["Pager"], None]] = None,
    ):
        self.message = message
        self.cursor = PagerCursor(tuple(cards))
        self.requester_id = requester_id
        self.view = view
        self.allow_symbols = allow_symbols
        self.render = render
        self.timeout = timeout
        self.status = PagerStatus.ACTIVE
        self._on_expire = on_expire
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def message_id(self) -> int:
        return self.message.id

    @property
    def active(self) -> bool:
        return self.status is PagerStatus.ACTIVE

    def start(self) -> None:
        self._arm()

    def _arm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.timeout, self.expire)

    def expire(self) -> None:
        """Stop accepting actions; the message keeps its last render."""
        if not self.active:
            return
        self.status = PagerStatus.EXPIRED
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        logger.debug(f"Pager for message {self.message_id} expired")
        if self._on_expire:
            self._on_expire(self)

    def accepts(self, user_id: int, action: Optional[PagerAction]) -> bool:
        return self.active and action is not None and user_id == self.requester_id

    async def handle(self, user_id: int, emoji) -> bool:
        """
        Apply a reaction from ``user_id``. Returns whether it was accepted.

        Errors while rendering or editing are logged and swallowed; the
        message keeps its previous render.
        """
        action = PagerAction.from_emoji(emoji)
        if not self.accepts(user_id, action):
            return False

        # swap the cursor before awaiting so the render sees a whole step
        self.cursor = snapshot = self.cursor.apply(action)
        self._arm()

        try:
            embed = await self.render(
                snapshot.ordered(), self.view, self.allow_symbols, snapshot.zoom
            )
            # a later action moved the cursor while we rendered; its edit wins
            if self.cursor is not snapshot:
                return True
            await self.message.edit(embed=embed)
        except Exception:
            logger.exception(f"Failed to update message {self.message_id} after {action.name}")
        return True


class PagerRegistry:
    """Active pagers keyed by message id."""

    def __init__(self):
        self._pagers: Dict[int, Pager] = {}

    def __len__(self) -> int:
        return len(self._pagers)

    def __contains__(self, message_id: int) -> bool:
        return message_id in self._pagers

    def get(self, message_id: int) -> Optional[Pager]:
        return self._pagers.get(message_id)

    def subscribe(self, pager: Pager) -> Pager:
        """Register and start a pager, replacing any earlier one for the message."""
        existing = self._pagers.get(pager.message_id)
        if existing is not None and existing is not pager:
            existing.expire()
        pager._on_expire = self._unsubscribe
        self._pagers[pager.message_id] = pager
        pager.start()
        return pager

    def _unsubscribe(self, pager: Pager) -> None:
        if self._pagers.get(pager.message_id) is pager:
            del self._pagers[pager.message_id]

    def cancel(self, message_id: int) -> None:
        pager = self._pagers.get(message_id)
        if pager is not None:
            pager.expire()

    def cancel_all(self) -> None:
        for pager in list(self._pagers.values()):
            pager.expire()

    async def dispatch(self, message_id: int, user_id: int, emoji) -> bool:
        pager = self._pagers.get(message_id)
        if pager is None:
            return False
        return await pager.handle(user_id, emoji)
