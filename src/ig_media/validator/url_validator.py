"""URL classifier for Instagram content links."""

import re
from typing import Optional

from ..errors import InvalidUrlError
from ..models import ContentKind, ContentReference


_HOST = r'^https?://(?:www\.)?instagram\.com'
_TAIL = r'/?(?:[/?#].*)?$'

# Path shapes, checked in order
URL_PATTERNS = [
    (ContentKind.REEL, re.compile(_HOST + r'/reels?/([A-Za-z0-9_-]+)' + _TAIL)),
    (ContentKind.POST, re.compile(_HOST + r'/p/([A-Za-z0-9_-]+)' + _TAIL)),
    (ContentKind.LONGFORM, re.compile(_HOST + r'/tv/([A-Za-z0-9_-]+)' + _TAIL)),
]

# Recognized but not supported
STORY_PATTERN = re.compile(_HOST + r'/stories/')

EMPTY_MESSAGE = "URL must be a non-empty string"
STORIES_MESSAGE = (
    "Stories are not supported. Only public reels, posts, and videos can be downloaded."
)


def canonical_url(kind: ContentKind, identifier: str) -> str:
    """Rebuild the normalized URL for a content reference."""
    return f"https://www.instagram.com/{kind.path}/{identifier}/"


def classify_url(url: object) -> ContentReference:
    """
    Validate a content URL and extract its kind and identifier.

    Args:
        url: Raw user input

    Returns:
        ContentReference with a rebuilt canonical URL

    Raises:
        InvalidUrlError: if the input is empty, not a string, a stories
            link, or does not match any supported shape
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError(EMPTY_MESSAGE)

    clean_url = url.strip()

    if STORY_PATTERN.match(clean_url):
        raise InvalidUrlError(STORIES_MESSAGE)

    for kind, pattern in URL_PATTERNS:
        match = pattern.match(clean_url)
        if match:
            identifier = match.group(1)
            return ContentReference(
                kind=kind,
                identifier=identifier,
                canonical_url=canonical_url(kind, identifier),
            )

    raise InvalidUrlError()


def extract_identifier(url: object) -> Optional[str]:
    """Return the content identifier, or None when the URL is not supported."""
    try:
        return classify_url(url).identifier
    except InvalidUrlError:
        return None


def is_supported(url: object) -> bool:
    """Check if a URL points at supported content."""
    return extract_identifier(url) is not None
