"""Glue between a command, the resolver, the embed builder and the pager."""

import logging
from typing import Optional, Sequence, Tuple

import discord

from .errors import NoResults, RenderFailure, ServiceUnavailable
from .models import CardRecord, View
from .pager import DEFAULT_TIMEOUT, Pager, PagerAction, PagerRegistry
from .presentation import card_image, error_embed, render_embed
from .resolver import CardResolver
from .rulings import RulingsFetcher

logger = logging.getLogger("cardbot.lookup")

OFFLINE_MESSAGE = "Scryfall is currently offline, please try again later."


def can_use_symbols(channel) -> bool:
    """Whether the bot may post external emoji in ``channel``; DMs always can."""
    guild = getattr(channel, "guild", None)
    if guild is None:
        return True
    return channel.permissions_for(guild.me).use_external_emojis


class CardLookup:
    """
    Handles one card command end to end.

    Owns no per-query state; everything interactive lives in the pagers it
    registers with ``registry``.
    """

    def __init__(
        self,
        resolver: CardResolver,
        rulings: Optional[RulingsFetcher] = None,
        registry: Optional[PagerRegistry] = None,
        prefix: str = "!",
        pager_timeout: float = DEFAULT_TIMEOUT,
    ):
        self.resolver = resolver
        self.rulings = rulings
        self.registry = registry if registry is not None else PagerRegistry()
        self.prefix = prefix
        self.pager_timeout = pager_timeout

    async def render(
        self, cards: Sequence[CardRecord], view: View, allow_symbols: bool, zoom: bool
    ) -> discord.Embed:
        return await render_embed(
            cards,
            view,
            allow_symbols=allow_symbols,
            zoom=zoom,
            prefix=self.prefix,
            rulings=self.rulings,
        )

    async def handle(self, view: View, query: str, channel, author) -> Optional[Pager]:
        """
        Look up ``query`` and post the result to ``channel``.

        Returns the pager driving the sent message, or None when nothing
        interactive was posted (blank query, error, render failure).
        """
        query = (query or "").strip().lower()
        # no card name, no lookup
        if not query:
            return None

        try:
            cards = await self.resolver.resolve(query)
        except ServiceUnavailable:
            await self._send_error(channel, OFFLINE_MESSAGE)
            return None
        except NoResults:
            await self._send_error(channel, f"No cards matched `{query}`.")
            return None

        allow_symbols = can_use_symbols(channel)
        try:
            embed = await self.render(cards, view, allow_symbols, False)
        except RenderFailure:
            logger.exception(f"Could not render results for {query!r}")
            return None

        try:
            message = await channel.send(embed=embed)
        except discord.HTTPException as e:
            logger.error(f"Could not send results for {query!r}: {e}")
            return None

        pager = self.registry.subscribe(
            Pager(
                message,
                cards,
                requester_id=author.id,
                view=view,
                allow_symbols=allow_symbols,
                render=self.render,
                timeout=self.pager_timeout,
            )
        )
        await self.add_controls(message, cards)
        return pager

    async def add_controls(self, message, cards: Tuple[CardRecord, ...]) -> None:
        """Add zoom and paging reactions; missing permissions just leave them off."""
        controls = []
        # zoom follows the front card, so any hit with an image needs it
        if any(card_image(card) for card in cards):
            controls.append(PagerAction.ZOOM)
        if len(cards) > 1:
            controls += [PagerAction.PREVIOUS, PagerAction.NEXT]

        try:
            for action in controls:
                await message.add_reaction(action.value)
        except discord.HTTPException as e:
            logger.debug(f"Could not add reactions to {message.id}: {e}")

    async def _send_error(self, channel, description: str) -> None:
        try:
            await channel.send(embed=error_embed(description))
        except discord.HTTPException as e:
            logger.error(f"Could not send error message: {e}")
