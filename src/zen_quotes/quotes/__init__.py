"""Quote module - models, API client, fallback table and fetcher."""

from zen_quotes.quotes.client import QuoteClient
from zen_quotes.quotes.fallback import DEFAULT_FALLBACKS, FallbackTable
from zen_quotes.quotes.fetcher import FALLBACK_NOTICE, QuoteFetcher
from zen_quotes.quotes.models import Category, Quote

__all__ = [
    "Category",
    "Quote",
    "QuoteClient",
    "QuoteFetcher",
    "FallbackTable",
    "DEFAULT_FALLBACKS",
    "FALLBACK_NOTICE",
]
