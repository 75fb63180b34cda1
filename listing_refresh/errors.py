"""
Exception hierarchy for the listing refresh pipeline.

Per-row problems are reported through RowOutcome values, not exceptions.
The classes below are for failures a stage cannot absorb on its own.
"""

from typing import Iterable, Optional


class ListingRefreshError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(ListingRefreshError):
    """A required configuration or credential value is missing."""


class RemoteApiError(ListingRefreshError):
    """
    Non-success response (or network failure) from the Etsy API.

    Attributes:
        status: HTTP status code, or None when no response was received
        body: Response payload (parsed JSON when available, else text)
    """

    def __init__(self, status: Optional[int], body=None, message: str = ""):
        self.status = status
        self.body = body
        if not message:
            message = f"HTTP {status}: {body}" if status is not None else f"Request failed: {body}"
        super().__init__(message)


class TemplateSchemaError(ListingRefreshError):
    """Input spreadsheet does not match the columns a stage needs."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing = list(missing)
        super().__init__(message)


class BrowserStateError(ListingRefreshError):
    """Saved browser login state (cookies, user agent) is missing or unreadable."""


class KeywordSessionError(ListingRefreshError):
    """The keyword research browser session cannot continue."""
