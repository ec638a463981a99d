"""Session state module - favorites and the quote session."""

from zen_quotes.state.favorites import FavoritesStore
from zen_quotes.state.session import QuoteSession

__all__ = ["FavoritesStore", "QuoteSession"]
