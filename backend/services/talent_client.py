from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import httpx

from config import settings
from models import ProviderPage
from utils.logger import talent_logger as logger

if TYPE_CHECKING:
    from services.leaderboard.query import ProfileSearchQuery


SEARCH_PROFILES_PATH = "/search/advanced/profiles"


class LeaderboardError(Exception):
    """Base class for errors surfaced by the leaderboard core."""


class ConfigurationError(LeaderboardError):
    """A required provider credential is missing."""


class UpstreamError(LeaderboardError):
    """The scoring provider answered with a non-success status or could not be reached."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Talent API returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class TalentProtocolClient:
    """Client for the Talent Protocol advanced profile search.

    Every call is a single GET; nothing is retried here. Timeouts live on
    the underlying ``httpx.AsyncClient``.

        GET /search/advanced/profiles?query=...&sort=...&page=...&per_page=...
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.TALENT_API_URL).rstrip("/")
        self._api_key = api_key
        self._timeout = timeout_seconds or settings.TALENT_API_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def api_key(self) -> Optional[str]:
        # Read lazily so a key rotated into settings is picked up without restart.
        return self._api_key or settings.TALENT_API_KEY

    async def _get_client(self) -> httpx.AsyncClient:
        """Return a long-lived async HTTP client, creating one if needed."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self):
        """Shut down the HTTP client cleanly."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def require_api_key(self) -> str:
        api_key = self.api_key
        if not api_key:
            raise ConfigurationError("Missing Talent API key")
        return api_key

    async def search_profiles(self, query: "ProfileSearchQuery") -> ProviderPage:
        """Run one advanced search and decode the page of profiles."""
        api_key = self.require_api_key()
        client = await self._get_client()
        url = f"{self.base_url}{SEARCH_PROFILES_PATH}"

        try:
            response = await client.get(
                url,
                params=query.to_params(),
                headers={"X-API-KEY": api_key},
            )
        except httpx.HTTPError as e:
            logger.error(
                "Talent API request failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamError(502, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error(
                "Talent API returned error status",
                url=url,
                status_code=response.status_code,
                min_score=query.min_score,
                page=query.page,
            )
            raise UpstreamError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(502, "Invalid JSON from Talent API") from e
        if not isinstance(data, dict):
            raise UpstreamError(502, "Unexpected Talent API response shape")

        return ProviderPage.from_talent_response(data)


talent_client = TalentProtocolClient()
