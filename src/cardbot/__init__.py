"""Discord bot that looks up Magic cards on Scryfall."""

__version__ = "0.3.0"
