"""Quote fetching with bounded retries and local fallback."""

import logging
import random

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from zen_quotes.config import RetryConfig
from zen_quotes.exceptions import QuoteAPIError
from zen_quotes.quotes.client import QuoteClient
from zen_quotes.quotes.fallback import DEFAULT_FALLBACKS, FallbackTable
from zen_quotes.quotes.models import Category, Quote

logger = logging.getLogger(__name__)

FALLBACK_NOTICE = "Unable to fetch a new quote. Please try again later."


class QuoteFetcher:
    """Combines the API client with the fallback table.

    A single :meth:`attempt` never retries; retry scheduling belongs to the
    caller (see :class:`zen_quotes.state.session.QuoteSession`), except for
    :meth:`resolve`, which awaits the whole chain.
    """

    def __init__(
        self,
        client: QuoteClient,
        fallbacks: FallbackTable = DEFAULT_FALLBACKS,
        retry: RetryConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.client = client
        self.fallbacks = fallbacks
        self.retry = retry or RetryConfig()
        self._rng = rng or random.Random()
        self.attempts = 0

    async def attempt(self, category: Category) -> Quote:
        """Make one request to the API.

        Raises:
            QuoteAPIError: If the request fails for any reason.
        """
        self.attempts += 1
        return await self.client.get_random(category)

    def fallback(self, category: Category) -> Quote:
        """Pick a local quote for ``category`` (wildcard table if it has none)."""
        quote = self.fallbacks.pick(category, self._rng)
        logger.warning(f"Using fallback quote for category '{category.value}'")
        return quote

    async def resolve(
        self, category: Category = Category.ALL, retries: int | None = None
    ) -> tuple[Quote, str | None]:
        """Fetch a quote, waiting through retries, and fall back on exhaustion.

        Returns:
            Tuple of (quote, notice). ``notice`` is set only when the fallback was used.
        """
        if retries is None:
            retries = self.retry.max_retries

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(retries + 1),
                wait=wait_fixed(self.retry.delay_seconds),
                retry=retry_if_exception_type(QuoteAPIError),
            ):
                with attempt:
                    return await self.attempt(category), None
        except RetryError as e:
            logger.warning(f"All {retries + 1} attempts failed: {e.last_attempt.exception()}")

        return self.fallback(category), FALLBACK_NOTICE
