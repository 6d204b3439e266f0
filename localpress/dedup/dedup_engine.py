"""Article de-duplication"""

from typing import List, Set

from localpress.models.article import Article
from localpress.utils.logger import get_logger

logger = get_logger(__name__)


class DeduplicationEngine:
    """
    Drops articles that repeat an earlier one.

    Two articles are duplicates when their headlines are equal OR their
    source URLs are equal. The first occurrence wins and input order is
    kept. Headlines are compared as exact text (surrounding whitespace
    ignored), so near-identical headlines from different outlets are not
    merged.
    """

    def deduplicate(self, articles: List[Article]) -> List[Article]:
        if not articles:
            return []

        seen_headlines: Set[str] = set()
        seen_urls: Set[str] = set()
        unique: List[Article] = []

        for article in articles:
            headline = self._headline_key(article)
            url = self._url_key(article)
            is_duplicate = (headline and headline in seen_headlines) or (url and url in seen_urls)

            # A dropped article still claims its keys
            if headline:
                seen_headlines.add(headline)
            if url:
                seen_urls.add(url)

            if not is_duplicate:
                unique.append(article)

        if len(unique) != len(articles):
            logger.debug("De-duplicated %d -> %d articles", len(articles), len(unique))
        return unique

    @staticmethod
    def _headline_key(article: Article) -> str:
        return (article.display_title or "").strip()

    @staticmethod
    def _url_key(article: Article) -> str:
        return (article.source_url or "").strip()
