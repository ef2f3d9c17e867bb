from .client import ScryfallClient

__all__ = ["ScryfallClient"]
