"""In-memory favorites list keyed by quote content."""

from collections.abc import Iterator

from zen_quotes.quotes.models import Quote


class FavoritesStore:
    """Ordered favorites, insertion order preserved, no duplicate content.

    Never persisted; lives as long as the session that owns it.
    """

    def __init__(self) -> None:
        self._items: list[Quote] = []

    def add(self, quote: Quote | None) -> bool:
        """Append a quote unless it is None or already favorited.

        Returns:
            True if the list changed.
        """
        if quote is None or self.is_favorited(quote):
            return False
        self._items.append(quote)
        return True

    def remove(self, quote: Quote) -> int:
        """Remove every entry with the same content. Returns how many were removed."""
        before = len(self._items)
        self._items = [q for q in self._items if q.content != quote.content]
        return before - len(self._items)

    def is_favorited(self, quote: Quote | None) -> bool:
        if quote is None:
            return False
        return any(q.content == quote.content for q in self._items)

    def get(self, position: int) -> Quote | None:
        """Look up a favorite by 1-based position."""
        if 1 <= position <= len(self._items):
            return self._items[position - 1]
        return None

    def __iter__(self) -> Iterator[Quote]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, quote: object) -> bool:
        return isinstance(quote, Quote) and self.is_favorited(quote)
