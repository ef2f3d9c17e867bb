#!/usr/bin/env python3
"""Discord bot that answers card commands with Scryfall data.

Requirements:
- DISCORD_BOT_TOKEN env var set to your bot token
- Message Content intent enabled for the bot in the developer portal

Run with ``cardbot`` or ``python -m cardbot.bot``.
"""

import logging
from typing import Optional

import discord
import httpx
from discord.ext import commands

from .config import Settings
from .log_decorator import log_command_calls
from .logging_config import describe_origin, setup_logging
from .lookup import CardLookup
from .models import View
from .pager import PagerRegistry
from .resolver import CardResolver
from .rulings import RulingsFetcher
from .scryfall import ScryfallClient
from .scryfall.http import DEFAULT_HEADERS

logger = logging.getLogger("cardbot.bot")


class CardCommands(commands.Cog, name="Cards"):
    """Card lookups. Page through hits with ⬅ ➡ and zoom with 🔍."""

    def __init__(self, lookup: CardLookup):
        self.lookup = lookup

    async def _lookup(self, ctx: commands.Context, view: View, query: str) -> None:
        if not query.strip():
            return
        logger.info(describe_origin(ctx.message, ctx.invoked_with or view.value, query))
        await self.lookup.handle(view, query, ctx.channel, ctx.author)

    @commands.command(
        name="card",
        brief="Search for an English Magic card by (partial) name",
        help=(
            "Search for an English Magic card by (partial) name, "
            "supports full Scryfall syntax.\n\n"
            "Examples: !card iona, !card t:creature o:flying, !card goyf e:fut"
        ),
        usage="<name or search>",
    )
    @log_command_calls
    async def card(self, ctx: commands.Context, *, query: str = ""):
        await self._lookup(ctx, View.CARD, query)

    @commands.command(
        name="price",
        aliases=["prices"],
        brief="Show the price in USD, EUR and TIX for a card",
        help="Show the price in USD, EUR and TIX for a card.\n\nExample: !price tarmogoyf",
        usage="<name or search>",
    )
    @log_command_calls
    async def price(self, ctx: commands.Context, *, query: str = ""):
        await self._lookup(ctx, View.PRICE, query)

    @commands.command(
        name="ruling",
        aliases=["rulings"],
        brief="Show the Gatherer rulings for a card",
        help="Show the Gatherer rulings for a card.\n\nExample: !ruling sylvan library",
        usage="<name or search>",
    )
    @log_command_calls
    async def ruling(self, ctx: commands.Context, *, query: str = ""):
        await self._lookup(ctx, View.RULING, query)

    @commands.command(
        name="legal",
        aliases=["legality"],
        brief="Show the format legality for a card",
        help="Show the format legality for a card.\n\nExample: !legal divining top",
        usage="<name or search>",
    )
    @log_command_calls
    async def legal(self, ctx: commands.Context, *, query: str = ""):
        await self._lookup(ctx, View.LEGAL, query)


class CardBot(commands.Bot):
    def __init__(self, settings: Settings):
        intents = discord.Intents.default()
        intents.message_content = True  # Required to read command arguments
        intents.messages = True
        intents.reactions = True
        super().__init__(command_prefix=settings.command_prefix, intents=intents)
        self.settings = settings
        self.registry = PagerRegistry()
        self.scryfall_http: Optional[httpx.AsyncClient] = None

    async def setup_hook(self) -> None:
        self.scryfall_http = httpx.AsyncClient(headers=DEFAULT_HEADERS, follow_redirects=True)
        client = ScryfallClient(
            self.settings.api_url,
            http=self.scryfall_http,
            timeout=self.settings.http_timeout,
        )
        lookup = CardLookup(
            CardResolver(client),
            rulings=RulingsFetcher(client),
            registry=self.registry,
            prefix=self.settings.command_prefix,
            pager_timeout=self.settings.pager_timeout,
        )
        await self.add_cog(CardCommands(lookup))

    async def on_ready(self):
        logger.info(f"{self.user} has connected to Discord!")
        logger.info(f"Bot is in {len(self.guilds)} guild(s)")

    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        # other bots share the "!" prefix; unknown commands are not ours to answer
        if isinstance(error, commands.CommandNotFound):
            return
        logger.error(describe_origin(ctx.message, "error", str(error)))

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent):
        await self._route_reaction(payload)

    async def on_raw_reaction_remove(self, payload: discord.RawReactionActionEvent):
        await self._route_reaction(payload)

    async def _route_reaction(self, payload: discord.RawReactionActionEvent) -> None:
        if self.user is not None and payload.user_id == self.user.id:
            return
        await self.registry.dispatch(payload.message_id, payload.user_id, payload.emoji)

    async def close(self) -> None:
        self.registry.cancel_all()
        if self.scryfall_http is not None:
            await self.scryfall_http.aclose()
            self.scryfall_http = None
        await super().close()


def main():
    settings = Settings.from_env()
    setup_logging(settings)

    if not settings.discord_token:
        logger.error("DISCORD_BOT_TOKEN environment variable is not set.")
        raise SystemExit(1)

    bot = CardBot(settings)
    # logging is already configured; keep discord.py from adding its own handler
    bot.run(settings.discord_token, log_handler=None)


if __name__ == "__main__":
    main()
