"""External source gateway - best-effort NewsData.io fetches

Nothing in here raises for a provider failure. Each public method returns
a (possibly empty) list of Articles and logs what went wrong, so the
external source can never block the CMS path.
"""

import asyncio
import math
from typing import Any, Dict, List, Optional

from localpress.dedup.dedup_engine import DeduplicationEngine
from localpress.ingestion.newsdata_connector import NewsDataConnector
from localpress.models.article import Article
from localpress.models.coverage_area import CoverageArea
from localpress.normalizer.article_normalizer import ArticleNormalizer
from localpress.utils.config_manager import ConfigManager
from localpress.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORIES = {
    "local": ["politics", "domestic", "other"],
    "general": ["politics", "business", "domestic"],
    "breaking": ["politics", "business", "domestic"],
}
DEFAULT_TIMEFRAMES = {"local": "7", "keyword": "7", "general": "3", "breaking": "1"}
MAX_SEARCH_TERMS = 2


class ExternalSourceGateway:
    """
    Fetches and normalizes articles from the external news provider.

    Usage:
        gateway = ExternalSourceGateway(NewsDataConnector())
        articles = await gateway.fetch_for_area(area, limit=10)
    """

    def __init__(
        self,
        connector: NewsDataConnector,
        normalizer: Optional[ArticleNormalizer] = None,
        dedup: Optional[DeduplicationEngine] = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        self._connector = connector
        self._normalizer = normalizer or ArticleNormalizer()
        self._dedup = dedup or DeduplicationEngine()

        if config:
            self._categories = {
                name: config.get_list(f"newsdata.categories.{name}", default)
                for name, default in DEFAULT_CATEGORIES.items()
            }
            self._timeframes = {
                name: str(config.get(f"newsdata.timeframes.{name}", default))
                for name, default in DEFAULT_TIMEFRAMES.items()
            }
            self._max_terms = config.get_int("newsdata.max_search_terms", MAX_SEARCH_TERMS)
        else:
            self._categories = {name: list(value) for name, value in DEFAULT_CATEGORIES.items()}
            self._timeframes = dict(DEFAULT_TIMEFRAMES)
            self._max_terms = MAX_SEARCH_TERMS

    async def fetch_for_area(self, area: CoverageArea, limit: int = 10) -> List[Article]:
        """
        Location news for a coverage area.

        One query per search term (at most two), each sized
        ceil(limit / candidate terms), last 7 days. A failed term is logged
        and skipped; the rest still count. Results are concatenated in term
        order, de-duplicated and cut to ``limit``.
        """
        try:
            candidates = self.build_search_terms(area)
            if not candidates or limit <= 0:
                return []

            terms = candidates[: self._max_terms]
            per_term = math.ceil(limit / len(candidates))

            responses = await asyncio.gather(
                *[
                    self._connector.search_news_by_location(
                        term,
                        timeframe=self._timeframes["local"],
                        size=per_term,
                        category=self._categories["local"],
                    )
                    for term in terms
                ],
                return_exceptions=True,
            )

            records: List[Dict[str, Any]] = []
            for term, response in zip(terms, responses):
                if isinstance(response, Exception):
                    logger.error("Error fetching external news for %r: %s", term, response)
                    continue
                if isinstance(response, BaseException):
                    raise response
                records.extend(response.get("results") or [])

            articles = self._normalizer.normalize_batch(records, areas=[area])
            unique = self._dedup.deduplicate(articles)[:limit]
            logger.info(
                "External news for %s: %d terms, %d records -> %d articles",
                area.zip_code, len(terms), len(records), len(unique),
            )
            return unique
        except Exception as e:
            logger.error("Error fetching external news for zip code %s: %s", area.zip_code, e)
            return []

    async def search_by_keyword(
        self,
        keyword: str,
        limit: int = 15,
        timeframe: Optional[str] = None,
        categories: Optional[List[str]] = None,
    ) -> List[Article]:
        """Keyword search across the provider, no location expansion."""
        return await self._fetch(
            "keyword search",
            q=keyword,
            category=categories,
            country=[self._connector.default_country],
            timeframe=timeframe or self._timeframes["keyword"],
            size=limit,
        )

    async def fetch_general(
        self,
        search: Optional[str] = None,
        categories: Optional[List[str]] = None,
        limit: int = 20,
        timeframe: Optional[str] = None,
    ) -> List[Article]:
        """National headlines, optionally filtered by a query."""
        return await self._fetch(
            "general news",
            q=search,
            category=categories or self._categories["general"],
            country=[self._connector.default_country],
            timeframe=timeframe or self._timeframes["general"],
            size=limit,
        )

    async def fetch_breaking(self, limit: int = 10) -> List[Article]:
        """Last 24 hours, no location filter."""
        return await self._fetch(
            "breaking news",
            category=self._categories["breaking"],
            country=[self._connector.default_country],
            timeframe=self._timeframes["breaking"],
            size=limit,
        )

    @staticmethod
    def build_search_terms(area: CoverageArea) -> List[str]:
        """City, county, "City ST": empty and repeated entries dropped, order kept."""
        candidates = [
            area.city,
            area.county,
            f"{area.city} {area.state}" if area.city and area.state else None,
        ]
        terms: List[str] = []
        for term in candidates:
            term = (term or "").strip()
            if term and term not in terms:
                terms.append(term)
        return terms

    async def _fetch(self, label: str, size: int, **params: Any) -> List[Article]:
        if size <= 0:
            return []
        try:
            response = await self._connector.fetch_news(size=size, **params)
            articles = self._normalizer.normalize_batch(response.get("results") or [])
        except Exception as e:
            logger.error("Error fetching %s: %s", label, e)
            return []
        return articles[:size]
