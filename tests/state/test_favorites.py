"""Tests for FavoritesStore."""

from zen_quotes.quotes.models import Quote
from zen_quotes.state.favorites import FavoritesStore


def make_quote(content: str = "Carpe diem.", author: str = "Horace", category: str | None = "life"):
    return Quote(content=content, author=author, category=category)


def test_starts_empty():
    store = FavoritesStore()
    assert len(store) == 0
    assert list(store) == []


def test_add_is_idempotent_by_content():
    store = FavoritesStore()
    quote = make_quote()

    assert store.add(quote) is True
    assert store.add(quote) is False
    # Different author, same content: still the same quote
    assert store.add(make_quote(author="Someone Else")) is False

    assert [q.content for q in store] == ["Carpe diem."]


def test_add_none_is_noop():
    store = FavoritesStore()
    assert store.add(None) is False
    assert len(store) == 0


def test_insertion_order_preserved():
    store = FavoritesStore()
    for text in ("First.", "Second.", "Third."):
        store.add(make_quote(text))

    assert [q.content for q in store] == ["First.", "Second.", "Third."]
    assert store.get(1).content == "First."
    assert store.get(3).content == "Third."
    assert store.get(0) is None
    assert store.get(4) is None


def test_remove_then_not_favorited():
    store = FavoritesStore()
    keep = make_quote("Keep me.")
    drop = make_quote("Drop me.")
    store.add(keep)
    store.add(drop)

    assert store.remove(drop) == 1

    assert not store.is_favorited(drop)
    assert store.is_favorited(keep)
    assert drop not in store
    assert keep in store


def test_remove_matches_on_content():
    store = FavoritesStore()
    store.add(make_quote("Shared text.", author="A"))

    assert store.remove(make_quote("Shared text.", author="B", category=None)) == 1
    assert len(store) == 0


def test_remove_missing_is_noop():
    store = FavoritesStore()
    store.add(make_quote("Present."))

    assert store.remove(make_quote("Absent.")) == 0
    assert len(store) == 1


def test_add_add_remove_leaves_empty():
    store = FavoritesStore()
    quote = make_quote()

    store.add(quote)
    store.add(quote)
    store.remove(quote)

    assert len(store) == 0
    assert not store.is_favorited(quote)


def test_is_favorited_none():
    assert FavoritesStore().is_favorited(None) is False

