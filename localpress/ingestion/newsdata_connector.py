"""NewsData.io connector - latest-news endpoint"""

import os
from typing import Any, Dict, Optional, Sequence, Union

import httpx

from localpress.errors import ConfigurationError, NewsDataError
from localpress.utils.logger import get_logger

logger = get_logger(__name__)


# NewsData.io policy (free plan)
# - size: at most 50 results per call
# - timeframe: a day count as a string ("1", "3", "7", "30")
# - list parameters (country, category, ...) are comma-joined
NEWSDATA_API_BASE_URL = "https://newsdata.io/api/1/news"
NEWSDATA_MAX_SIZE = 50
DEFAULT_LOCAL_CATEGORIES = ("politics", "domestic", "other")

ParamValue = Union[None, str, int, Sequence[str]]


class NewsDataConnector:
    """
    NewsData.io client.

    Every method raises NewsDataError when the call does not succeed
    (transport error, non-2xx, error payload). Callers that must not fail
    catch it; see ExternalSourceGateway.

    Usage:
        connector = NewsDataConnector()  # reads NEWSDATA_API_KEY
        response = await connector.search_news_by_location("Beverly Hills", size=5)
        records = response["results"]

    Environment:
        NEWSDATA_API_KEY: API key (required)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = NEWSDATA_API_BASE_URL,
        language: str = "en",
        country: str = "us",
        max_size: int = NEWSDATA_MAX_SIZE,
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            api_key: NewsData.io key (None reads NEWSDATA_API_KEY).
            base_url: Endpoint URL.
            language: Language sent with every request.
            country: Default country for location queries.
            max_size: Upper bound applied to ``size``.
            timeout: Per-request timeout when the connector opens its own connections.
            http_client: Shared AsyncClient. None opens one per request.

        Raises:
            ConfigurationError: No API key available.
        """
        self._api_key = api_key or os.environ.get("NEWSDATA_API_KEY", "")
        if not self._api_key:
            raise ConfigurationError("NEWSDATA_API_KEY environment variable is required")

        self._base_url = base_url
        self._language = language
        self._country = country
        self._max_size = max_size
        self._timeout = timeout
        self._http = http_client

    @property
    def default_country(self) -> str:
        return self._country

    async def fetch_news(
        self,
        q: Optional[str] = None,
        q_in_title: Optional[str] = None,
        country: ParamValue = None,
        category: ParamValue = None,
        domain: ParamValue = None,
        exclude_domain: ParamValue = None,
        timeframe: Optional[str] = None,
        size: Optional[int] = None,
        page: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Query the latest-news endpoint.

        Returns:
            {"status", "totalResults", "results": [...], "nextPage"?}
        """
        params = self.build_params(
            q=q,
            qInTitle=q_in_title,
            country=country,
            category=category,
            domain=domain,
            excludedomain=exclude_domain,
            timeframe=timeframe,
            size=size,
            page=page,
        )
        logger.debug("NewsData request: q=%r category=%s size=%s", q, params.get("category"), params.get("size"))

        try:
            response = await self._send(params)
        except httpx.HTTPError as e:
            raise NewsDataError(f"Failed to fetch news from NewsData.io: {e}") from e

        if not response.is_success:
            raise NewsDataError(
                f"NewsData API error: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NewsDataError("NewsData API returned invalid JSON", status=response.status_code) from e

        if not isinstance(data, dict) or data.get("status") == "error":
            raise NewsDataError("NewsData API returned an error payload", status=response.status_code)
        if not isinstance(data.get("results"), list):
            data["results"] = []
        return data

    async def search_news_by_location(
        self,
        location: str,
        timeframe: str = "7",
        size: int = 10,
        category: ParamValue = None,
    ) -> Dict[str, Any]:
        """Free-text location search ("Beverly Hills CA")."""
        return await self.fetch_news(
            q=location,
            category=category or list(DEFAULT_LOCAL_CATEGORIES),
            country=[self._country],
            timeframe=timeframe,
            size=size,
        )

    def build_params(self, **params: ParamValue) -> Dict[str, str]:
        """Query string: key and language first, None dropped, lists comma-joined, size clamped."""
        query: Dict[str, str] = {"apikey": self._api_key, "language": self._language}
        for key, value in params.items():
            if value is None:
                continue
            if key == "size":
                value = max(1, min(int(value), self._max_size))
            if isinstance(value, (list, tuple)):
                if not value:
                    continue
                value = ",".join(str(v) for v in value)
            query[key] = str(value)
        return query

    async def _send(self, params: Dict[str, str]) -> httpx.Response:
        if self._http is not None:
            return await self._http.get(self._base_url, params=params)
        async with httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Accept": "application/json", "User-Agent": "LocalPress/1.0"},
        ) as client:
            return await client.get(self._base_url, params=params)
