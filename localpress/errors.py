"""Error taxonomy for LocalPress

"Not found" is never an exception past the gateways: it becomes an empty
list or None. Provider errors on the CMS path surface as
ProviderTransportError; on the external news path they are logged and
dropped.
"""

from typing import Optional


class LocalPressError(Exception):
    """Base class for all LocalPress errors."""


class ConfigurationError(LocalPressError):
    """A required setting or credential is missing. Raised at construction time."""


class ValidationError(LocalPressError):
    """User input failed a form-level check."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class ProviderError(LocalPressError):
    """A data provider (CMS or external news API) did not deliver."""

    def __init__(self, message: str, provider: str = "", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status


class ProviderNotFoundError(ProviderError):
    """The provider answered "no results" (HTTP 404)."""


class ProviderTransportError(ProviderError):
    """Unreachable provider, malformed response or a non-2xx/non-404 status."""


class NewsDataError(ProviderTransportError):
    """A single NewsData.io call failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message, provider="newsdata", status=status)
