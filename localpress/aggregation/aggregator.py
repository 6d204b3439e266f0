"""Article aggregation - the entry point used by the web layer"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from localpress.aggregation.merge import gather_sources, merge_articles, sort_by_publication_date
from localpress.aggregation.search_aggregator import SearchAggregator
from localpress.dedup.dedup_engine import DeduplicationEngine
from localpress.ingestion.cms_gateway import CmsArticleGateway
from localpress.ingestion.external_gateway import ExternalSourceGateway
from localpress.models.article import Article
from localpress.models.coverage_area import CoverageArea
from localpress.registry.area_resolver import AreaResolver
from localpress.utils.config_manager import ConfigManager
from localpress.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AreaPage:
    """Everything a zip code page needs. ``area`` is None when the zip code is not covered."""

    zip_code: str
    area: Optional[CoverageArea] = None
    articles: List[Article] = field(default_factory=list)

    @property
    def covered(self) -> bool:
        return self.area is not None


class Aggregator:
    """
    Resolves zip codes and merges CMS and external articles.

    CMS errors propagate as ProviderTransportError; the external source
    only ever contributes results or nothing.

    Usage:
        aggregator = Aggregator(resolver, cms_gateway, external_gateway)
        articles = await aggregator.get_articles_for_zip("90210")
    """

    def __init__(
        self,
        resolver: AreaResolver,
        cms_gateway: CmsArticleGateway,
        external_gateway: ExternalSourceGateway,
        dedup: Optional[DeduplicationEngine] = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        self._resolver = resolver
        self._cms = cms_gateway
        self._external = external_gateway
        self._dedup = dedup or DeduplicationEngine()
        self._search = SearchAggregator(resolver, cms_gateway, external_gateway, dedup=self._dedup, config=config)

        if config:
            self._zip_external_limit = config.get_int("aggregation.zip_external_limit", 10)
        else:
            self._zip_external_limit = 10

    async def resolve_area(self, zip_code: str) -> Optional[CoverageArea]:
        return await self._resolver.resolve(zip_code)

    async def get_articles_for_zip(self, zip_code: str, now: Optional[datetime] = None) -> List[Article]:
        """
        CMS and external articles for a zip code, newest first.

        An uncovered zip code gives an empty list.

        Raises:
            ProviderTransportError: The CMS could not be queried.
        """
        area = await self._resolver.resolve(zip_code)
        if area is None:
            logger.info("No active coverage area for zip code %s", zip_code)
            return []
        return await self._articles_for_area(area, now=now)

    async def get_area_page(self, zip_code: str, now: Optional[datetime] = None) -> AreaPage:
        """Area plus its articles, resolving the zip code once."""
        area = await self._resolver.resolve(zip_code)
        if area is None:
            return AreaPage(zip_code=zip_code)
        articles = await self._articles_for_area(area, now=now)
        return AreaPage(zip_code=zip_code, area=area, articles=articles)

    async def get_all_articles(self, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[Article]:
        """
        Recent headlines.

        Without ``limit`` this is the CMS recent feed, sorted but not
        de-duplicated. With ``limit``, a CMS feed shorter than ``limit`` is
        topped up with general external news, then merged and cut to ``limit``.
        """
        cms_articles = await self._cms.fetch_recent()
        if limit is None:
            return sort_by_publication_date(cms_articles, now=now)

        shortfall = limit - len(cms_articles)
        external_articles: List[Article] = []
        if shortfall > 0:
            external_articles = await self._external.fetch_general(limit=shortfall)
            logger.info("Recent feed short by %d, added %d external articles", shortfall, len(external_articles))

        if not external_articles:
            return sort_by_publication_date(cms_articles, now=now)[:limit]
        return merge_articles(cms_articles, external_articles, dedup=self._dedup, limit=limit, now=now)

    async def search_articles(self, keyword: str, zip_code: Optional[str] = None) -> List[Article]:
        return await self._search.search(keyword, zip_code=zip_code)

    async def get_article(self, slug: str) -> Optional[Article]:
        return await self._cms.get_by_slug(slug)

    async def _articles_for_area(self, area: CoverageArea, now: Optional[datetime] = None) -> List[Article]:
        cms_articles, external_articles = await gather_sources(
            self._cms.fetch_by_area(area),
            self._external.fetch_for_area(area, limit=self._zip_external_limit),
        )
        results = merge_articles(cms_articles, external_articles, dedup=self._dedup, now=now)
        logger.info(
            "Articles for %s (%s): cms=%d external=%d -> %d",
            area.zip_code, area.location_name, len(cms_articles), len(external_articles), len(results),
        )
        return results
