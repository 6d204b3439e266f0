from localpress.ingestion.cosmic_client import CosmicClient
from localpress.ingestion.newsdata_connector import NewsDataConnector
from localpress.ingestion.cms_gateway import CmsArticleGateway
from localpress.ingestion.external_gateway import ExternalSourceGateway

__all__ = [
    "CosmicClient",
    "NewsDataConnector",
    "CmsArticleGateway",
    "ExternalSourceGateway",
]
