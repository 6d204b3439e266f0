"""News source (attribution) model"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from localpress.models.media import ImageAsset


@dataclass
class SourceType:
    """Type tag of a source, e.g. {"key": "newspaper", "value": "Newspaper"}."""

    key: str
    value: str


@dataclass
class NewsSource:
    """Attribution record. Comes from the CMS or is synthesized for external articles."""

    id: str = ""
    slug: str = ""
    title: str = ""
    source_name: str = ""
    website_url: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[ImageAsset] = None
    source_type: Optional[SourceType] = None

    @classmethod
    def from_cosmic(cls, obj: Optional[Dict[str, Any]]) -> Optional["NewsSource"]:
        """Build from a Cosmic ``news-sources`` object. Unresolved references (plain ids) yield None."""
        if not isinstance(obj, dict):
            return None
        metadata = obj.get("metadata") or {}
        type_data = metadata.get("type")
        source_type = None
        if isinstance(type_data, dict) and type_data.get("key"):
            source_type = SourceType(key=type_data["key"], value=type_data.get("value", type_data["key"]))

        return cls(
            id=obj.get("id", ""),
            slug=obj.get("slug", ""),
            title=obj.get("title", ""),
            source_name=metadata.get("source_name") or obj.get("title", ""),
            website_url=metadata.get("website_url") or None,
            description=metadata.get("description") or None,
            logo=ImageAsset.from_dict(metadata.get("logo")),
            source_type=source_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "source_name": self.source_name,
            "website_url": self.website_url,
            "description": self.description,
            "logo": self.logo.to_dict() if self.logo else None,
            "type": {"key": self.source_type.key, "value": self.source_type.value} if self.source_type else None,
        }
