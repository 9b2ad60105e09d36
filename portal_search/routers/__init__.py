from . import autocomplete, health, search

__all__ = ["autocomplete", "health", "search"]
