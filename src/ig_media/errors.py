"""Failure taxonomy for media extraction."""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why an extraction did not produce a result."""

    INVALID_URL = "INVALID_URL"              # Input is not a supported content URL
    PRIVATE_CONTENT = "PRIVATE_CONTENT"      # Source signalled restricted access
    NOT_FOUND = "NOT_FOUND"                  # Source reports content does not exist
    EXTRACTION_FAILED = "EXTRACTION_FAILED"  # Page fetched but no usable media
    FETCH_ERROR = "FETCH_ERROR"              # Network failure after retries

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    FailureKind.INVALID_URL: 400,
    FailureKind.PRIVATE_CONTENT: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.EXTRACTION_FAILED: 500,
    FailureKind.FETCH_ERROR: 500,
}


class ExtractionError(RuntimeError):
    """Base class for every classified extraction failure."""

    kind: FailureKind = FailureKind.EXTRACTION_FAILED
    default_message: str = "Failed to extract media"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidUrlError(ExtractionError):
    """Raised when the input does not match a supported URL shape."""

    kind = FailureKind.INVALID_URL
    default_message = "Invalid Instagram URL. Please provide a valid reel, post, or video URL."


class PrivateContentError(ExtractionError):
    """Raised on an explicit private marker or an access-denied status."""

    kind = FailureKind.PRIVATE_CONTENT
    default_message = "This content is private or unavailable"


class NotFoundError(ExtractionError):
    """Raised when the source reports the content does not exist."""

    kind = FailureKind.NOT_FOUND
    default_message = "Post not found or has been deleted"


class FetchError(ExtractionError):
    """Raised when a page could not be retrieved after all attempts."""

    kind = FailureKind.FETCH_ERROR
    default_message = "Failed to fetch the page"


class ExtractionFailedError(ExtractionError):
    """Raised when fetched pages yield no usable media candidate."""

    kind = FailureKind.EXTRACTION_FAILED
    default_message = "Failed to extract media. The post format may not be supported."


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""
