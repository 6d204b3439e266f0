"""Tip recording - stores reader tips in the CMS (no payment processing)"""

from datetime import date
from typing import List, Optional

from localpress.errors import ProviderError, ProviderNotFoundError, ProviderTransportError
from localpress.ingestion.cosmic_client import CosmicClient
from localpress.models.tip import Tip
from localpress.utils.logger import get_logger
from localpress.utils.validators import require_email, require_tip_amount

logger = get_logger(__name__)

TIP_TYPE = "tips"


class TipService:
    """Write sink for the tip modal plus the public tip wall."""

    def __init__(self, cms: CosmicClient, public_limit: int = 10) -> None:
        self._cms = cms
        self._public_limit = public_limit

    async def create_tip(
        self,
        amount: object,
        tipper_name: str = "",
        message: str = "",
        email: Optional[str] = None,
        show_publicly: bool = False,
        today: Optional[date] = None,
    ) -> Tip:
        """
        Validate and record a tip.

        Raises:
            ValidationError: Bad amount or email.
            ProviderTransportError: The CMS write failed.
        """
        tip = Tip(
            amount=require_tip_amount(amount),
            tipper_name=(tipper_name or "").strip() or "Anonymous",
            message=(message or "").strip(),
            email=require_email(email) if email else "",
            tip_date=(today or date.today()).isoformat(),
            show_publicly=bool(show_publicly),
        )

        try:
            response = await self._cms.insert_one(TIP_TYPE, tip.to_cosmic_record())
        except ProviderError as e:
            logger.error("Error creating tip: %s", e)
            raise ProviderTransportError("Failed to create tip", provider=e.provider, status=e.status) from e

        created = Tip.from_cosmic(response["object"])
        logger.info("Tip recorded: %s (%.2f)", created.id or "-", created.amount)
        return created

    async def get_public_tips(self) -> List[Tip]:
        try:
            response = await self._cms.find(TIP_TYPE, {"metadata.show_publicly": True}, limit=self._public_limit)
        except ProviderNotFoundError:
            return []
        except ProviderTransportError as e:
            logger.error("Error fetching public tips: %s", e)
            raise ProviderTransportError("Failed to fetch public tips", provider=e.provider, status=e.status) from e
        return [Tip.from_cosmic(obj) for obj in response["objects"]]
