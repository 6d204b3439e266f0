"""Article model (the common schema)

Both CMS records and external provider records end up as ``Article``.
CMS articles keep their native ids; external ones carry ids prefixed with
EXTERNAL_ID_PREFIX so the two never collide in one list.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from localpress.models.category import CategoryTag, DEFAULT_CATEGORY
from localpress.models.coverage_area import CoverageArea
from localpress.models.media import ImageAsset
from localpress.models.news_source import NewsSource
from localpress.utils.date_utils import iso_date_to_datetime, parse_timestamp, utc_now

ORIGIN_CMS = "cms"
ORIGIN_EXTERNAL = "external"
EXTERNAL_ID_PREFIX = "newsdata"


@dataclass
class Article:
    """A news article in the common schema."""

    id: str = ""
    slug: str = ""
    title: str = ""
    headline: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    source_url: Optional[str] = None
    publication_date: Optional[str] = None  # "YYYY-MM-DD"
    zip_code_areas: List[CoverageArea] = field(default_factory=list)
    news_source: Optional[NewsSource] = None
    featured_image: Optional[ImageAsset] = None
    category: CategoryTag = DEFAULT_CATEGORY

    # CMS creation time, or synthesis time for external articles
    created_at: Optional[datetime] = None
    origin: str = ORIGIN_CMS

    @property
    def display_title(self) -> str:
        return self.headline or self.title

    @property
    def is_external(self) -> bool:
        return self.origin == ORIGIN_EXTERNAL

    def effective_date(self, now: Optional[datetime] = None) -> datetime:
        """
        Date used for ordering: publication date, else created_at, else ``now``.
        Undated articles therefore sort as the newest.
        """
        published = iso_date_to_datetime(self.publication_date)
        if published is not None:
            return published
        if self.created_at is not None:
            return self.created_at
        return now or utc_now()

    @classmethod
    def from_cosmic(cls, obj: Dict[str, Any]) -> "Article":
        """Build from a Cosmic ``news-articles`` object fetched with depth=1."""
        metadata = obj.get("metadata") or {}
        areas = [
            CoverageArea.from_cosmic(area)
            for area in metadata.get("zip_code_areas") or []
            if isinstance(area, dict)
        ]
        return cls(
            id=obj.get("id", ""),
            slug=obj.get("slug", ""),
            title=obj.get("title", ""),
            headline=metadata.get("headline") or None,
            summary=metadata.get("summary") or None,
            content=metadata.get("content") or obj.get("content") or None,
            source_url=metadata.get("source_url") or None,
            publication_date=metadata.get("publication_date") or None,
            zip_code_areas=areas,
            news_source=NewsSource.from_cosmic(metadata.get("news_source")),
            featured_image=ImageAsset.from_dict(metadata.get("featured_image")),
            category=CategoryTag.from_dict(metadata.get("category")),
            created_at=parse_timestamp(obj.get("created_at")),
            origin=ORIGIN_CMS,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view for the web layer."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "headline": self.display_title,
            "summary": self.summary,
            "content": self.content,
            "source_url": self.source_url,
            "publication_date": self.publication_date,
            "zip_code_areas": [area.to_dict() for area in self.zip_code_areas],
            "news_source": self.news_source.to_dict() if self.news_source else None,
            "featured_image": self.featured_image.to_dict() if self.featured_image else None,
            "category": self.category.to_dict(),
            "origin": self.origin,
        }
