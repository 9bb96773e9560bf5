from __future__ import annotations

from typing import Optional


class NewsClientError(Exception):
    """Base class for every error raised by the news client."""


class FetchError(NewsClientError):
    """Raised when a request cannot be sent or the server answers with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ApiStatusError(NewsClientError):
    """Raised when a well-formed response reports a failure in its `status` field."""

    def __init__(self, message: str, *, status: Optional[str] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


class SourcesFetchError(ApiStatusError):
    """Raised when the sources endpoint reports a failure in its `status` field."""


class ParseError(NewsClientError):
    """Raised when a response body does not have the expected shape."""


class StaleResponseError(NewsClientError):
    """Raised when a response arrives after a newer request was issued for the same session."""
