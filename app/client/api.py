import logging

import httpx
from pydantic import ValidationError

from app.config import settings
from app.schemas import SuggestionResponse

logger = logging.getLogger("termsuggest.client.api")


class SuggestFetchError(Exception):
    """A request to the suggestion service failed."""


class SuggestClient:
    """Async HTTP client for the suggestion and popularity endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 5.0,
        http: httpx.AsyncClient | None = None,
    ):
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url, timeout=timeout
        )

    async def fetch_suggestions(self, query: str, limit: int = 10) -> SuggestionResponse:
        """Fetch ranked suggestions. Raises SuggestFetchError on any failure."""
        try:
            resp = await self._http.get("/api/v1/search", params={"q": query, "limit": limit})
            resp.raise_for_status()
            return SuggestionResponse.model_validate(resp.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise SuggestFetchError(f"Suggestion fetch failed for q={query!r}: {e}") from e

    async def record_selection(self, term: str) -> None:
        """Report a chosen term so its popularity is incremented."""
        try:
            resp = await self._http.post("/api/v1/search/popularity", json={"term": term})
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise SuggestFetchError(f"Popularity update failed for term={term!r}: {e}") from e

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SuggestClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
