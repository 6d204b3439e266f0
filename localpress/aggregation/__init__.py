from localpress.aggregation.aggregator import Aggregator, AreaPage
from localpress.aggregation.search_aggregator import SearchAggregator
from localpress.aggregation.merge import gather_sources, merge_articles, sort_by_publication_date
from localpress.aggregation.factory import create_aggregator

__all__ = [
    "Aggregator",
    "AreaPage",
    "SearchAggregator",
    "gather_sources",
    "merge_articles",
    "sort_by_publication_date",
    "create_aggregator",
]
