"""Quote and category types."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Quote categories offered to the user, in display order."""

    ALL = "all"
    INSPIRATIONAL = "inspirational"
    LIFE = "life"
    LOVE = "love"
    SUCCESS = "success"
    WISDOM = "wisdom"

    @property
    def is_wildcard(self) -> bool:
        return self is Category.ALL

    @classmethod
    def parse(cls, value: "str | Category") -> "Category":
        """Parse a category label (case-insensitive).

        Raises:
            ValueError: If the label is not one of the offered categories.
        """
        if isinstance(value, Category):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown category '{value}' (choose from: {choices})") from None


@dataclass(frozen=True, eq=False)
class Quote:
    """A quote. Two quotes with the same content are the same quote."""

    content: str
    author: str
    category: str | None = None

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("Quote content must not be empty")
        if not self.author:
            raise ValueError("Quote author must not be empty")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quote):
            return NotImplemented
        return self.content == other.content

    def __hash__(self) -> int:
        return hash(self.content)

    def with_category(self, category: "str | Category | None") -> "Quote":
        """Return a copy labelled with the given category."""
        if isinstance(category, Category):
            category = category.value
        return Quote(content=self.content, author=self.author, category=category)
