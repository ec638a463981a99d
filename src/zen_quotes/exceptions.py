"""Custom exception hierarchy for zen-quotes."""


class ZenQuotesError(Exception):
    """Base exception for all zen-quotes errors."""

    pass


class ConfigError(ZenQuotesError):
    """Configuration-related errors."""

    pass


class QuoteAPIError(ZenQuotesError):
    """Quote API errors (transport, status or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FallbackDataError(ZenQuotesError):
    """Static fallback table is missing or malformed."""

    pass
