"""Two-source fan-out and merge policy shared by the aggregators"""

import asyncio
from datetime import datetime
from typing import Awaitable, List, Optional, Tuple

from localpress.dedup.dedup_engine import DeduplicationEngine
from localpress.models.article import Article
from localpress.utils.date_utils import utc_now
from localpress.utils.logger import get_logger

logger = get_logger(__name__)


async def gather_sources(
    cms_call: Awaitable[List[Article]],
    external_call: Awaitable[List[Article]],
) -> Tuple[List[Article], List[Article]]:
    """
    Run the CMS and external fetches concurrently and wait for both.

    A CMS failure is re-raised once both branches have settled. An external
    failure is logged and counts as zero external results.
    """
    cms_result, external_result = await asyncio.gather(cms_call, external_call, return_exceptions=True)

    if isinstance(external_result, BaseException):
        if not isinstance(external_result, Exception):
            raise external_result
        logger.error("External source failed, continuing with CMS results only: %s", external_result)
        external_result = []

    if isinstance(cms_result, BaseException):
        raise cms_result

    return cms_result, external_result


def sort_by_publication_date(articles: List[Article], now: Optional[datetime] = None) -> List[Article]:
    """
    Newest first. Articles without a publication date use created_at, or
    ``now`` when they have neither, so undated articles lead the list.
    Ties keep their input order.
    """
    now = now or utc_now()
    return sorted(articles, key=lambda article: article.effective_date(now), reverse=True)


def merge_articles(
    *groups: List[Article],
    dedup: Optional[DeduplicationEngine] = None,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Article]:
    """Concatenate (CMS group first), de-duplicate, sort newest first, optionally truncate."""
    merged: List[Article] = []
    for group in groups:
        merged.extend(group)

    unique = (dedup or DeduplicationEngine()).deduplicate(merged)
    ordered = sort_by_publication_date(unique, now=now)
    if limit is not None:
        ordered = ordered[:limit]
    return ordered
