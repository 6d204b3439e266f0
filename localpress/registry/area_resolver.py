"""Area resolution - zip code -> active coverage area"""

from typing import List, Optional

from localpress.errors import ProviderNotFoundError, ProviderTransportError
from localpress.ingestion.cosmic_client import CosmicClient
from localpress.models.coverage_area import CoverageArea
from localpress.utils.logger import get_logger

logger = get_logger(__name__)

AREA_TYPE = "zip-code-areas"


class AreaResolver:
    """
    Looks up coverage areas in the CMS.

    "No such area" is a normal outcome (None / empty list). A CMS failure
    is not: it is raised as ProviderTransportError so callers can tell
    "zip code not covered" apart from "could not ask".

    Usage:
        resolver = AreaResolver(cosmic_client)
        area = await resolver.resolve("90210")
    """

    def __init__(self, cms: CosmicClient, area_list_limit: int = 100) -> None:
        self._cms = cms
        self._area_list_limit = area_list_limit

    async def resolve(self, zip_code: str) -> Optional[CoverageArea]:
        """First active area whose zip code equals ``zip_code``, or None."""
        zip_code = (zip_code or "").strip()
        if not zip_code:
            return None

        try:
            response = await self._cms.find(
                AREA_TYPE,
                {"metadata.zip_code": zip_code, "metadata.active": True},
                limit=1,
            )
        except ProviderNotFoundError:
            return None
        except ProviderTransportError as e:
            logger.error("Error finding zip code area %s: %s", zip_code, e)
            raise ProviderTransportError("Failed to find zip code area", provider=e.provider, status=e.status) from e

        for obj in response["objects"]:
            area = CoverageArea.from_cosmic(obj)
            if area.active and area.zip_code == zip_code:
                return area
        return None

    async def list_active(self) -> List[CoverageArea]:
        """All active coverage areas."""
        try:
            response = await self._cms.find(AREA_TYPE, {"metadata.active": True}, limit=self._area_list_limit)
        except ProviderNotFoundError:
            return []
        except ProviderTransportError as e:
            logger.error("Error fetching zip code areas: %s", e)
            raise ProviderTransportError("Failed to fetch zip code areas", provider=e.provider, status=e.status) from e

        areas = [CoverageArea.from_cosmic(obj) for obj in response["objects"]]
        return [area for area in areas if area.active]
