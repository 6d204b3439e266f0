"""Category taxonomy

Fixed, process-wide set of six categories. Built once at import time and
never mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CategoryConfig:
    """Display configuration for one category."""

    key: str
    value: str
    color: str
    description: str


@dataclass(frozen=True)
class CategoryTag:
    """The category attached to an article: key plus display label."""

    key: str
    value: str

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CategoryTag":
        """CMS category field -> tag. Unknown or missing keys become the default."""
        key = (data or {}).get("key")
        config = CATEGORY_BY_KEY.get(key) if key else None
        if config is None:
            return DEFAULT_CATEGORY
        return cls(key=config.key, value=config.value)

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "value": self.value}


CATEGORY_CONFIGS: Tuple[CategoryConfig, ...] = (
    CategoryConfig("local", "Local News", "news-local", "Community news and local events"),
    CategoryConfig("politics", "Politics", "news-politics", "Political news and government updates"),
    CategoryConfig("business", "Business", "news-business", "Business news and economic updates"),
    CategoryConfig("sports", "Sports", "news-sports", "Sports news and athletic events"),
    CategoryConfig("weather", "Weather", "news-weather", "Weather updates and forecasts"),
    CategoryConfig("community", "Community", "news-community", "Community events and social news"),
)

CATEGORY_BY_KEY: Mapping[str, CategoryConfig] = MappingProxyType(
    {config.key: config for config in CATEGORY_CONFIGS}
)

CATEGORY_KEYS: Tuple[str, ...] = tuple(config.key for config in CATEGORY_CONFIGS)

DEFAULT_CATEGORY = CategoryTag(key="local", value="Local News")


def get_category_config(key: str) -> Optional[CategoryConfig]:
    """Display configuration for a category key, or None."""
    return CATEGORY_BY_KEY.get(key)


def category_tag(key: str) -> CategoryTag:
    """Tag for a known key; unknown keys get the default."""
    config = CATEGORY_BY_KEY.get(key)
    if config is None:
        return DEFAULT_CATEGORY
    return CategoryTag(key=config.key, value=config.value)
