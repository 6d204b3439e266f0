"""Coverage area model"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CoverageArea:
    """A serviceable zip code region, maintained in the CMS (read-only here)."""

    id: str = ""
    slug: str = ""
    title: str = ""
    zip_code: str = ""
    city: str = ""
    state: str = ""
    county: Optional[str] = None
    active: bool = False

    @property
    def location_name(self) -> str:
        """"Beverly Hills, CA", falling back to the zip code."""
        if self.city and self.state:
            return f"{self.city}, {self.state}"
        return self.city or self.zip_code

    @classmethod
    def from_cosmic(cls, obj: Dict[str, Any]) -> "CoverageArea":
        """Build from a Cosmic ``zip-code-areas`` object."""
        metadata = obj.get("metadata") or {}
        return cls(
            id=obj.get("id", ""),
            slug=obj.get("slug", ""),
            title=obj.get("title", ""),
            zip_code=str(metadata.get("zip_code", "")),
            city=metadata.get("city", "") or "",
            state=metadata.get("state", "") or "",
            county=metadata.get("county") or None,
            active=bool(metadata.get("active", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "zip_code": self.zip_code,
            "city": self.city,
            "state": self.state,
            "county": self.county,
            "active": self.active,
        }
