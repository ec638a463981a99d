"""Async HTTP client for the Quotable random quote endpoint."""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from zen_quotes.config import ApiConfig
from zen_quotes.exceptions import QuoteAPIError
from zen_quotes.quotes.models import Category, Quote

logger = logging.getLogger(__name__)


class QuotePayload(BaseModel):
    """Fields we read from the API response; everything else is ignored."""

    model_config = ConfigDict(extra="ignore")

    content: str = Field(min_length=1)
    author: str = Field(min_length=1)


class QuoteClient:
    """Fetches single random quotes from the remote API."""

    def __init__(
        self,
        config: ApiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or ApiConfig()
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "QuoteClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    def build_params(self, category: Category) -> dict[str, str]:
        """Query parameters for a request scoped to ``category``."""
        if category.is_wildcard:
            return {}
        return {"tags": category.value}

    async def get_random(self, category: Category = Category.ALL) -> Quote:
        """Fetch one random quote.

        The returned quote is labelled with the requested category, not with
        whatever tags the server reports.

        Raises:
            QuoteAPIError: On transport failure, non-2xx status or a malformed payload.
        """
        url = self.config.random_url
        params = self.build_params(category)
        logger.debug(f"GET {url} params={params}")

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise QuoteAPIError(
                f"Quote API returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise QuoteAPIError(f"Failed to reach quote API: {e}") from e

        try:
            payload = QuotePayload.model_validate(response.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            kind = "invalid" if isinstance(e, ValidationError) else "unparseable"
            raise QuoteAPIError(f"Quote API returned {kind} payload: {e}") from e

        return Quote(content=payload.content, author=payload.author, category=category.value)
