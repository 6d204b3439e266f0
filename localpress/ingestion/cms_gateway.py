"""CMS article gateway - news articles and sources stored in Cosmic"""

import re
from typing import Any, Dict, List, Optional

from localpress.errors import ProviderNotFoundError, ProviderTransportError
from localpress.ingestion.cosmic_client import CosmicClient
from localpress.models.article import Article
from localpress.models.coverage_area import CoverageArea
from localpress.models.news_source import NewsSource
from localpress.utils.config_manager import ConfigManager
from localpress.utils.logger import get_logger

logger = get_logger(__name__)

ARTICLE_TYPE = "news-articles"
SOURCE_TYPE = "news-sources"


class CmsArticleGateway:
    """
    Reads editorial articles from the CMS.

    Every query is capped (area 50, recent feed 100, keyword search 10 by
    default). A CMS "no results" answer gives an empty list / None; any
    other CMS failure raises ProviderTransportError.
    """

    def __init__(self, cms: CosmicClient, config: Optional[ConfigManager] = None) -> None:
        self._cms = cms
        if config:
            self._area_limit = config.get_int("cms.limits.area_articles", 50)
            self._recent_limit = config.get_int("cms.limits.recent_articles", 100)
            self._search_limit = config.get_int("cms.limits.search_articles", 10)
            self._source_limit = config.get_int("cms.limits.sources", 50)
        else:
            self._area_limit = 50
            self._recent_limit = 100
            self._search_limit = 10
            self._source_limit = 50

    async def fetch_by_area(self, area: CoverageArea, limit: Optional[int] = None) -> List[Article]:
        """Articles tagged with the area's id."""
        return await self._find_articles(
            {"metadata.zip_code_areas": area.id},
            limit or self._area_limit,
            "Failed to fetch news articles for zip code",
        )

    async def fetch_recent(self, limit: Optional[int] = None) -> List[Article]:
        """Unfiltered feed for the homepage."""
        return await self._find_articles({}, limit or self._recent_limit, "Failed to fetch news articles")

    async def search(
        self,
        keyword: str,
        area_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Article]:
        """Case-insensitive match on headline, summary or content; optionally narrowed to one area."""
        pattern = re.escape(keyword.strip())
        query: Dict[str, Any] = {
            "$or": [
                {"metadata.headline": {"$regex": pattern, "$options": "i"}},
                {"metadata.summary": {"$regex": pattern, "$options": "i"}},
                {"metadata.content": {"$regex": pattern, "$options": "i"}},
            ]
        }
        if area_id:
            query["metadata.zip_code_areas"] = area_id
        return await self._find_articles(query, limit or self._search_limit, "Failed to search news articles")

    async def get_by_slug(self, slug: str) -> Optional[Article]:
        try:
            response = await self._cms.find_one(ARTICLE_TYPE, {"slug": slug}, depth=1)
        except ProviderNotFoundError:
            return None
        except ProviderTransportError as e:
            logger.error("Error fetching news article %s: %s", slug, e)
            raise ProviderTransportError("Failed to fetch news article", provider=e.provider, status=e.status) from e
        return Article.from_cosmic(response["object"])

    async def list_sources(self) -> List[NewsSource]:
        try:
            response = await self._cms.find(SOURCE_TYPE, limit=self._source_limit)
        except ProviderNotFoundError:
            return []
        except ProviderTransportError as e:
            logger.error("Error fetching news sources: %s", e)
            raise ProviderTransportError("Failed to fetch news sources", provider=e.provider, status=e.status) from e
        sources = [NewsSource.from_cosmic(obj) for obj in response["objects"]]
        return [source for source in sources if source is not None]

    async def _find_articles(self, query: Dict[str, Any], limit: int, failure_message: str) -> List[Article]:
        try:
            response = await self._cms.find(ARTICLE_TYPE, query, depth=1, limit=limit)
        except ProviderNotFoundError:
            return []
        except ProviderTransportError as e:
            logger.error("%s: %s", failure_message, e)
            raise ProviderTransportError(failure_message, provider=e.provider, status=e.status) from e

        return [Article.from_cosmic(obj) for obj in response["objects"][:limit]]
