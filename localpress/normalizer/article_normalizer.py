"""External article normalization - NewsData.io record -> Article"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from localpress.models.article import Article, EXTERNAL_ID_PREFIX, ORIGIN_EXTERNAL
from localpress.models.coverage_area import CoverageArea
from localpress.models.media import ImageAsset
from localpress.models.news_source import NewsSource, SourceType
from localpress.normalizer.category_mapper import map_category
from localpress.utils.date_utils import to_iso_date, utc_now
from localpress.utils.logger import get_logger

logger = get_logger(__name__)

UNTITLED = "Untitled"
EXTERNAL_SOURCE_TYPE = SourceType(key="external", value="External Feed")


class ArticleNormalizer:
    """
    Converts NewsData.io result records into the common Article schema.

    Pure transformation: missing fields degrade to defaults, nothing raises.
    """

    def normalize(
        self,
        record: Dict[str, Any],
        areas: Optional[List[CoverageArea]] = None,
        source: Optional[NewsSource] = None,
        index: int = 0,
        synthesized_at: Optional[datetime] = None,
    ) -> Article:
        """
        Normalize one provider record.

        Args:
            record: One entry of the provider's ``results`` array.
            areas: Coverage areas to attach (the area the query was made for).
            source: Attribution to attach. None synthesizes one from
                ``source_name``/``source_url`` when the record has them.
            index: Position of the record in the current result list; part of the id.
            synthesized_at: Timestamp recorded as created_at. Defaults to now.
        """
        data = record if isinstance(record, dict) else {}

        title = _text(data.get("title")) or UNTITLED
        slug = _text(data.get("article_id"))
        description = _text(data.get("description"))
        content = _text(data.get("content")) or description
        image_url = _text(data.get("image_url"))

        return Article(
            id=self.external_id(index, slug),
            slug=slug,
            title=title,
            headline=title,
            summary=description,
            content=content,
            source_url=_text(data.get("link")) or None,
            publication_date=to_iso_date(data.get("pubDate")),
            zip_code_areas=list(areas or []),
            news_source=source if source is not None else self._inline_source(data),
            featured_image=ImageAsset(url=image_url, imgix_url=image_url) if image_url else None,
            category=map_category(data.get("category")),
            created_at=synthesized_at or utc_now(),
            origin=ORIGIN_EXTERNAL,
        )

    def normalize_batch(
        self,
        records: List[Dict[str, Any]],
        areas: Optional[List[CoverageArea]] = None,
        source: Optional[NewsSource] = None,
        start_index: int = 0,
    ) -> List[Article]:
        """Normalize a result list. Ids are numbered from ``start_index``."""
        synthesized_at = utc_now()
        results = [
            self.normalize(record, areas, source, index=start_index + offset, synthesized_at=synthesized_at)
            for offset, record in enumerate(records or [])
        ]
        logger.debug("Normalized %d external records", len(results))
        return results

    @staticmethod
    def external_id(index: int, slug: str) -> str:
        """"newsdata-3-abc123"; the prefix keeps external ids apart from CMS ids."""
        if slug:
            return f"{EXTERNAL_ID_PREFIX}-{index}-{slug}"
        return f"{EXTERNAL_ID_PREFIX}-{index}"

    @staticmethod
    def _inline_source(data: Dict[str, Any]) -> Optional[NewsSource]:
        source_id = _text(data.get("source_id"))
        name = _text(data.get("source_name")) or source_id
        if not name:
            return None
        icon = _text(data.get("source_icon"))
        return NewsSource(
            id=f"{EXTERNAL_ID_PREFIX}-source-{source_id or name}",
            title=name,
            source_name=name,
            website_url=_text(data.get("source_url")) or None,
            logo=ImageAsset(url=icon, imgix_url=icon) if icon else None,
            source_type=EXTERNAL_SOURCE_TYPE,
        )


def _text(value: Any) -> str:
    """Provider field as text. None and empty values become ""; numbers and the like are str()-ed."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return ""
    return str(value)
