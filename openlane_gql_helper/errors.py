"""Error classes for Openlane GraphQL helper."""
from __future__ import annotations

from typing import Optional


class OpenlaneError(Exception):
    """Base class for all errors raised by this package."""


class OpenlaneGQLError(OpenlaneError):
    """Raised for HTTP, GraphQL or malformed-response errors from Openlane."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        snippet = message if len(message) <= 300 else message[:300]
        if status_code is not None:
            msg = f"HTTP {status_code}: {snippet}"
        else:
            msg = snippet
        super().__init__(msg)
        self.status_code = status_code


class FetchError(OpenlaneError):
    """Raised when a page of a paginated query could not be fetched."""

    def __init__(self, page: int, after: Optional[str], cause: Exception) -> None:
        super().__init__(f"failed to fetch page {page}: {cause}")
        self.page = page
        self.after = after
        self.cause = cause


class MissingCredentialError(OpenlaneError):
    """Raised when no API token is available."""


class ConfigError(OpenlaneError):
    """Raised when the code generator configuration cannot be loaded."""
