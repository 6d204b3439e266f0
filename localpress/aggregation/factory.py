"""Wiring of clients, gateways and aggregators from settings and environment"""

from typing import Optional

from localpress.aggregation.aggregator import Aggregator
from localpress.ingestion.cms_gateway import CmsArticleGateway
from localpress.ingestion.cosmic_client import COSMIC_API_BASE_URL, CosmicClient
from localpress.ingestion.external_gateway import ExternalSourceGateway
from localpress.ingestion.newsdata_connector import NEWSDATA_API_BASE_URL, NEWSDATA_MAX_SIZE, NewsDataConnector
from localpress.registry.area_resolver import AreaResolver
from localpress.utils.config_manager import ConfigManager


def create_cosmic_client(config: ConfigManager) -> CosmicClient:
    """Raises ConfigurationError when the bucket credentials are missing."""
    return CosmicClient(
        base_url=config.get("cms.base_url", COSMIC_API_BASE_URL),
        timeout=float(config.get("cms.timeout_seconds", 15)),
    )


def create_newsdata_connector(config: ConfigManager) -> NewsDataConnector:
    """Raises ConfigurationError when NEWSDATA_API_KEY is missing."""
    return NewsDataConnector(
        base_url=config.get("newsdata.base_url", NEWSDATA_API_BASE_URL),
        language=config.get("newsdata.language", "en"),
        country=config.get("newsdata.country", "us"),
        max_size=config.get_int("newsdata.max_size", NEWSDATA_MAX_SIZE),
        timeout=float(config.get("newsdata.timeout_seconds", 15)),
    )


def create_aggregator(
    config: Optional[ConfigManager] = None,
    cms: Optional[CosmicClient] = None,
    connector: Optional[NewsDataConnector] = None,
) -> Aggregator:
    """
    Build the full aggregation stack.

    Missing credentials fail here, at startup, rather than per request.
    """
    config = config or ConfigManager()
    cms = cms or create_cosmic_client(config)
    connector = connector or create_newsdata_connector(config)

    resolver = AreaResolver(cms, area_list_limit=config.get_int("cms.limits.areas", 100))
    cms_gateway = CmsArticleGateway(cms, config)
    external_gateway = ExternalSourceGateway(connector, config=config)
    return Aggregator(resolver, cms_gateway, external_gateway, config=config)
