"""Canvas state: block catalog, item store and suggestion selections."""

from .catalog import BlockCatalog, DEFAULT_BLOCKS
from .store import CanvasStore
from .selections import SuggestionSelectionSet

__all__ = ["BlockCatalog", "DEFAULT_BLOCKS", "CanvasStore", "SuggestionSelectionSet"]
