"""Image asset model"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ImageAsset:
    """An image with its raw URL and the display-optimizable (imgix) URL."""

    url: str
    imgix_url: str

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ImageAsset"]:
        if not data or not data.get("url"):
            return None
        return cls(url=data["url"], imgix_url=data.get("imgix_url") or data["url"])

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "imgix_url": self.imgix_url}
