"""Zen Quotes - random quote client with favorites and offline fallback."""

__version__ = "0.1.0"
