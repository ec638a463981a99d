"""Session state: current quote, favorites, loading flag and notice.

All mutation happens on the event loop that drives the session. A failed
attempt with retry budget left schedules a delayed retry task and returns
immediately; the retry resolves through the same path later.

Pending retries are never cancelled when a newer request starts. Each fresh
request bumps ``generation``; with ``discard_stale_results`` enabled a
resolution from an older generation is dropped, otherwise the last chain to
resolve wins.
"""

import asyncio
import logging
from collections.abc import Callable

from zen_quotes.config import RetryConfig, SessionConfig
from zen_quotes.exceptions import QuoteAPIError
from zen_quotes.quotes.fetcher import FALLBACK_NOTICE, QuoteFetcher
from zen_quotes.quotes.models import Category, Quote
from zen_quotes.state.favorites import FavoritesStore

logger = logging.getLogger(__name__)


class QuoteSession:
    """Owns everything the user sees for one run of the client."""

    def __init__(
        self,
        fetcher: QuoteFetcher,
        retry: RetryConfig | None = None,
        config: SessionConfig | None = None,
        on_change: Callable[["QuoteSession"], None] | None = None,
    ):
        self.fetcher = fetcher
        # Called after every applied resolution, including background retries
        self.on_change = on_change
        self.retry = retry or fetcher.retry
        config = config or SessionConfig()

        self.category = Category.parse(config.default_category)
        self.discard_stale_results = config.discard_stale_results
        self.current_quote: Quote | None = None
        self.favorites = FavoritesStore()
        self.loading = False
        self.notice: str | None = None
        self.generation = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def can_favorite(self) -> bool:
        """Whether the favorite action is enabled."""
        return self.current_quote is not None and not self.favorites.is_favorited(
            self.current_quote
        )

    @property
    def has_pending_retries(self) -> bool:
        return bool(self._pending)

    async def fetch(
        self,
        category: Category | str | None = None,
        retries_remaining: int | None = None,
    ) -> Quote | None:
        """Start a fresh fetch chain.

        Args:
            category: Category to request (defaults to the active category)
            retries_remaining: Retry budget (defaults to the configured maximum)

        Returns:
            The quote applied to the session, or None if the first attempt
            failed and a retry was scheduled.
        """
        category = self.category if category is None else Category.parse(category)
        if retries_remaining is None:
            retries_remaining = self.retry.max_retries
        if retries_remaining < 0:
            raise ValueError("retries_remaining must be non-negative")

        self.generation += 1
        self.notice = None
        self.loading = True
        return await self._attempt(category, retries_remaining, self.generation)

    async def select_category(self, category: Category | str) -> Quote | None:
        """Switch the active category and fetch with a fresh retry budget."""
        self.category = Category.parse(category)
        logger.info(f"Category changed to '{self.category.value}'")
        return await self.fetch()

    def add_favorite(self) -> bool:
        """Favorite the current quote."""
        return self.favorites.add(self.current_quote)

    def remove_favorite(self, quote: Quote) -> int:
        return self.favorites.remove(quote)

    async def drain(self) -> None:
        """Wait until every scheduled retry has run to completion."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        """Cancel outstanding retries at the end of the session."""
        for task in list(self._pending):
            task.cancel()
        await asyncio.gather(*list(self._pending), return_exceptions=True)
        self._pending.clear()

    async def _attempt(self, category: Category, retries: int, generation: int) -> Quote | None:
        try:
            quote = await self.fetcher.attempt(category)
        except QuoteAPIError as e:
            if retries > 0:
                logger.warning(f"Quote fetch failed, {retries} retries left: {e}")
                self._schedule_retry(category, retries - 1, generation)
                return None
            logger.warning(f"Quote fetch failed, no retries left: {e}")
            return self._resolve(self.fetcher.fallback(category), generation, FALLBACK_NOTICE)

        return self._resolve(quote, generation)

    def _schedule_retry(self, category: Category, retries: int, generation: int) -> None:
        task = asyncio.create_task(self._retry_after(category, retries, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _retry_after(self, category: Category, retries: int, generation: int) -> None:
        await asyncio.sleep(self.retry.delay_seconds)
        await self._attempt(category, retries, generation)

    def _resolve(self, quote: Quote, generation: int, notice: str | None = None) -> Quote | None:
        if self.discard_stale_results and generation != self.generation:
            logger.debug(
                f"Discarding stale quote from request {generation} "
                f"(current is {self.generation})"
            )
            return None

        self.current_quote = quote
        if notice:
            self.notice = notice
        self.loading = False
        if self.on_change is not None:
            self.on_change(self)
        return quote
