"""Keyword search across the CMS and the external provider"""

from datetime import datetime
from typing import List, Optional

from localpress.aggregation.merge import gather_sources, merge_articles
from localpress.dedup.dedup_engine import DeduplicationEngine
from localpress.ingestion.cms_gateway import CmsArticleGateway
from localpress.ingestion.external_gateway import ExternalSourceGateway
from localpress.models.article import Article
from localpress.registry.area_resolver import AreaResolver
from localpress.utils.config_manager import ConfigManager
from localpress.utils.logger import get_logger

logger = get_logger(__name__)


class SearchAggregator:
    """
    Same fan-out and merge policy as the zip code Aggregator, keyed by a
    keyword.

    The optional zip code only narrows the CMS query. External results are
    queried by keyword alone. An unknown zip code means no narrowing.
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

        if config:
            self._cms_limit = config.get_int("aggregation.search_cms_limit", 10)
            self._external_limit = config.get_int("aggregation.search_external_limit", 10)
            self._result_limit = config.get_int("aggregation.search_result_limit", 20)
        else:
            self._cms_limit = 10
            self._external_limit = 10
            self._result_limit = 20

    async def search(
        self,
        keyword: str,
        zip_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[Article]:
        """
        Up to 10 CMS matches plus up to 10 external matches, de-duplicated,
        newest first, cut to 20.

        Raises:
            ProviderTransportError: The CMS could not be queried.
        """
        keyword = (keyword or "").strip()
        if not keyword:
            return []

        area_id = None
        if zip_code:
            area = await self._resolver.resolve(zip_code)
            if area is not None:
                area_id = area.id

        cms_articles, external_articles = await gather_sources(
            self._cms.search(keyword, area_id=area_id, limit=self._cms_limit),
            self._external.search_by_keyword(keyword, limit=self._external_limit),
        )

        results = merge_articles(
            cms_articles, external_articles, dedup=self._dedup, limit=self._result_limit, now=now
        )
        logger.info(
            "Search %r (zip=%s): cms=%d external=%d -> %d",
            keyword, zip_code or "-", len(cms_articles), len(external_articles), len(results),
        )
        return results
