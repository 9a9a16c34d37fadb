import asyncio
import logging
from typing import Optional

import httpx

from soulchat.config import settings
from soulchat.models.search import SearchOutcome

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Search API key is not configured"
INVALID_KEY = (
    "The search API key seems to be invalid or expired. "
    "Please provide a valid Tavily API key."
)
TIMED_OUT = "Search request timed out"
NO_RESULTS = "No results found for this query"
MALFORMED = "Malformed response from search API"

CONTENT_PREVIEW_CHARS = 150

_AUTH_FAILURE_MARKERS = ("Unauthorized", "invalid API key")


class SearchError(Exception):
    def __init__(self, message: str, status_code: int = 502, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def format_results(query: str, results: list[dict]) -> str:
    formatted = f'Here\'s what I found about "{query}":\n\n'
    for index, result in enumerate(results, start=1):
        content = result.get("content") or ""
        formatted += f"{index}. {result.get('title') or ''}\n"
        formatted += f"   {content[:CONTENT_PREVIEW_CHARS]}...\n"
        formatted += f"   Source: {result.get('url') or ''}\n\n"
    return formatted


class SearchGateway:
    """One Tavily search call per query, bounded by a hard deadline."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str = "https://api.tavily.com/search",
        timeout: float = 8.0,
        max_results: int = 3,
        search_depth: str = "basic",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.max_results = max_results
        self.search_depth = search_depth
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "SearchGateway":
        return cls(
            api_key=settings.tavily_api_key,
            url=settings.tavily_search_url,
            timeout=settings.search_timeout_seconds,
            max_results=settings.search_max_results,
            search_depth=settings.search_depth,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _payload(self, query: str) -> dict:
        return {
            "query": query,
            "search_depth": self.search_depth,
            "include_domains": [],
            "exclude_domains": [],
            "max_results": self.max_results,
            "include_answer": True,
            "include_images": False,
            "include_raw_content": False,
        }

    async def fetch(self, query: str) -> dict:
        """Return the provider's JSON payload or raise SearchError."""
        if not self.is_configured:
            logger.error(NOT_CONFIGURED)
            raise SearchError(NOT_CONFIGURED, status_code=500)

        logger.info("Performing internet search for: %r", query)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await asyncio.wait_for(
                    client.post(self.url, json=self._payload(query), headers=headers),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("Search for %r timed out after %.1fs", query, self.timeout)
            raise SearchError(TIMED_OUT, status_code=504)
        except httpx.HTTPError as e:
            logger.warning("Search request failed", exc_info=True)
            raise SearchError(f"Search request failed: {e}", status_code=502)

        if not resp.is_success:
            body = resp.text
            logger.error("Search API error %s: %s", resp.status_code, body)
            if resp.status_code == 401 or any(m in body for m in _AUTH_FAILURE_MARKERS):
                raise SearchError(INVALID_KEY, status_code=401, details=body)
            raise SearchError(
                f"Error from search API: {resp.reason_phrase}",
                status_code=resp.status_code if resp.status_code >= 400 else 502,
                details=body,
            )

        try:
            data = resp.json()
        except ValueError:
            raise SearchError(MALFORMED)
        if not isinstance(data, dict):
            raise SearchError(MALFORMED)
        return data

    async def search(self, query: str) -> SearchOutcome:
        try:
            data = await self.fetch(query)
        except SearchError as e:
            return SearchOutcome(success=False, error_message=e.message)

        answer = data.get("answer")
        if answer:
            return SearchOutcome(success=True, result_text=answer)

        results = [r for r in (data.get("results") or []) if isinstance(r, dict)]
        if results:
            return SearchOutcome(
                success=True,
                result_text=format_results(query, results[: self.max_results]),
            )

        return SearchOutcome(success=False, error_message=NO_RESULTS)
