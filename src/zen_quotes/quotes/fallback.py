"""Static quotes served when the remote API is unavailable.

The table is validated when it is built, so a category without quotes fails
at import time rather than when a user first hits the fallback path.
"""

import random
from collections.abc import Iterable, Iterator, Mapping

from zen_quotes.exceptions import FallbackDataError
from zen_quotes.quotes.models import Category, Quote

FALLBACK_QUOTES: dict[str, list[tuple[str, str]]] = {
    "all": [
        ("The only way to do great work is to love what you do.", "Steve Jobs"),
        ("The journey of a thousand miles begins with one step.", "Lao Tzu"),
        ("What we think, we become.", "Buddha"),
        ("Well done is better than well said.", "Benjamin Franklin"),
        ("It always seems impossible until it's done.", "Nelson Mandela"),
    ],
    "inspirational": [
        ("Believe you can and you're halfway there.", "Theodore Roosevelt"),
        ("You must be the change you wish to see in the world.", "Mahatma Gandhi"),
        ("Act as if what you do makes a difference. It does.", "William James"),
        ("Keep your face always toward the sunshine.", "Walt Whitman"),
        ("Start where you are. Use what you have. Do what you can.", "Arthur Ashe"),
    ],
    "life": [
        ("Life is what happens when you're busy making other plans.", "John Lennon"),
        ("In three words I can sum up everything I've learned about life: it goes on.", "Robert Frost"),
        ("The unexamined life is not worth living.", "Socrates"),
        ("Life is really simple, but we insist on making it complicated.", "Confucius"),
        ("Life must be understood backward. But it must be lived forward.", "Soren Kierkegaard"),
    ],
    "love": [
        ("Love all, trust a few, do wrong to none.", "William Shakespeare"),
        ("Where there is love there is life.", "Mahatma Gandhi"),
        ("We are shaped and fashioned by what we love.", "Johann Wolfgang von Goethe"),
        ("Love is composed of a single soul inhabiting two bodies.", "Aristotle"),
        ("The best thing to hold onto in life is each other.", "Audrey Hepburn"),
    ],
    "success": [
        ("Success is not final, failure is not fatal: it is the courage to continue that counts.", "Winston Churchill"),
        ("I find that the harder I work, the more luck I seem to have.", "Thomas Jefferson"),
        ("Success usually comes to those who are too busy to be looking for it.", "Henry David Thoreau"),
        ("Don't be afraid to give up the good to go for the great.", "John D. Rockefeller"),
        ("The secret of getting ahead is getting started.", "Mark Twain"),
    ],
    "wisdom": [
        ("The only true wisdom is in knowing you know nothing.", "Socrates"),
        ("Knowing yourself is the beginning of all wisdom.", "Aristotle"),
        ("Turn your wounds into wisdom.", "Oprah Winfrey"),
        ("The fool doth think he is wise, but the wise man knows himself to be a fool.", "William Shakespeare"),
        ("Wisdom begins in wonder.", "Socrates"),
    ],
}


class FallbackTable(Mapping[Category, tuple[Quote, ...]]):
    """Category-indexed fallback quotes.

    Lookups for a category without an entry return the wildcard entry.
    """

    def __init__(
        self,
        data: Mapping[str, list[tuple[str, str]]],
        required: Iterable[Category] = tuple(Category),
    ):
        self._required = {Category.ALL, *required}
        self._quotes: dict[Category, tuple[Quote, ...]] = {}

        for name, pairs in data.items():
            try:
                category = Category.parse(name)
            except ValueError as e:
                raise FallbackDataError(str(e)) from e
            try:
                quotes = tuple(
                    Quote(content=content, author=author, category=category.value)
                    for content, author in pairs
                )
            except ValueError as e:
                raise FallbackDataError(f"Invalid fallback quote for '{name}': {e}") from e
            self._quotes[category] = quotes

        self.validate()

    def validate(self) -> None:
        """Check the wildcard and every required category have quotes.

        Raises:
            FallbackDataError: If a required category has no quotes.
        """
        missing = [c.value for c in Category if c in self._required and not self._quotes.get(c)]
        if missing:
            raise FallbackDataError(
                f"No fallback quotes for categories: {', '.join(missing)}"
            )

    def __getitem__(self, category: Category) -> tuple[Quote, ...]:
        quotes = self._quotes.get(category)
        if not quotes:
            return self._quotes[Category.ALL]
        return quotes

    def __iter__(self) -> Iterator[Category]:
        return iter(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def pick(self, category: Category, rng: random.Random | None = None) -> Quote:
        """Pick a pseudo-random fallback quote labelled with the requested category."""
        chooser = rng or random
        return chooser.choice(self[category]).with_category(category)


DEFAULT_FALLBACKS = FallbackTable(FALLBACK_QUOTES)
