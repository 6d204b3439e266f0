"""Tip model (write-only sink for the tip modal)"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Tip:
    """A reader's support record. No payment is attached to it."""

    amount: float
    tipper_name: str = "Anonymous"
    message: str = ""
    email: str = ""
    tip_date: Optional[str] = None
    show_publicly: bool = False
    id: str = ""
    title: str = ""

    def to_cosmic_record(self) -> Dict[str, Any]:
        """Payload for a Cosmic ``tips`` insert."""
        title = f"Tip from {self.tipper_name}" if self.tipper_name and self.tipper_name != "Anonymous" else "Anonymous Tip"
        return {
            "title": title,
            "metadata": {
                "amount": self.amount,
                "tipper_name": self.tipper_name or "Anonymous",
                "message": self.message or "",
                "email": self.email or "",
                "tip_date": self.tip_date,
                "show_publicly": self.show_publicly,
            },
        }

    @classmethod
    def from_cosmic(cls, obj: Dict[str, Any]) -> "Tip":
        metadata = obj.get("metadata") or {}
        return cls(
            id=obj.get("id", ""),
            title=obj.get("title", ""),
            amount=float(metadata.get("amount", 0) or 0),
            tipper_name=metadata.get("tipper_name") or "Anonymous",
            message=metadata.get("message") or "",
            email=metadata.get("email") or "",
            tip_date=metadata.get("tip_date"),
            show_publicly=bool(metadata.get("show_publicly", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Public view; the email address is left out."""
        record = self.to_cosmic_record()
        public = {k: v for k, v in record["metadata"].items() if k != "email"}
        return {"id": self.id, "title": self.title or record["title"], **public}
