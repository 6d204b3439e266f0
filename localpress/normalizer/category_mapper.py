"""NewsData.io category tag -> LocalPress category"""

from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from localpress.models.category import CategoryTag, DEFAULT_CATEGORY, category_tag

# Provider tag -> taxonomy key. Tags not listed fall back to "local".
CATEGORY_MAPPING: Mapping[str, str] = MappingProxyType({
    "politics": "politics",
    "business": "business",
    "sports": "sports",
    "domestic": "local",
    "other": "community",
    "environment": "community",
    "health": "community",
    "science": "community",
    "technology": "business",
})


def first_category(tags: Union[None, str, Sequence[str]]) -> Optional[str]:
    """First provider tag, or None. Later tags are ignored; anything but a string or list of strings is None."""
    if isinstance(tags, (list, tuple)):
        tags = tags[0] if tags else None
    if isinstance(tags, str) and tags:
        return tags
    return None


def map_category(tags: Union[None, str, Sequence[str]]) -> CategoryTag:
    """
    Map a provider record's category tags to exactly one taxonomy entry.

    Only the first tag is looked at. A missing or unmapped tag yields
    the default ("local" / "Local News").
    """
    tag = first_category(tags)
    if tag is None:
        return DEFAULT_CATEGORY
    key = CATEGORY_MAPPING.get(tag.strip().lower())
    if key is None:
        return DEFAULT_CATEGORY
    return category_tag(key)
