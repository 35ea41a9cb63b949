"""Shared helpers for candidate extractors."""

import re
from typing import Callable, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ..models import MediaCandidate, MediaKind, RawPage


# An extractor scans one page and returns zero or more candidates
Extractor = Callable[[RawPage, BeautifulSoup], List[MediaCandidate]]

# Quality heuristic: higher declared resolution wins
RESOLUTIONS = (1080, 720, 480)
HD_QUALITY = 720
DEFAULT_QUALITY = 360
META_QUALITY = 100

VIDEO_EXTENSIONS = ('.mp4', '.mov', '.webm', '.m3u8')
VIDEO_HOSTS = ('cdninstagram', 'fbcdn')
IMAGE_HOSTS = ('cdninstagram', 'fbcdn', 'scontent')

_UNICODE_ESCAPE = re.compile(r'\\u([0-9a-fA-F]{4})')
_RESOLUTION = re.compile(r'(?<!\d)(%s)(?!\d)' % '|'.join(str(r) for r in RESOLUTIONS))
_HD_MARKER = re.compile(r'(?:^|[_\-./])hd(?:$|[_\-./])|quality_hd', re.IGNORECASE)


def unescape_url(raw: str) -> str:
    """Undo JSON string escaping of a URL embedded in page source."""
    url = _UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), raw)
    url = url.replace('\\/', '/').replace('\\', '')
    return url.replace('&amp;', '&')


def quality_score(url: str, hd: bool = False) -> int:
    """
    Best-effort quality ranking for a media URL.

    Embedded resolution numbers (1080 > 720 > 480) win, an explicit HD
    marker counts as 720, anything else gets the default of 360.
    """
    # Path only; query strings hold signed tokens
    path = urlparse(url).path
    score = DEFAULT_QUALITY
    for match in _RESOLUTION.finditer(path):
        score = max(score, int(match.group(1)))
    if hd or _HD_MARKER.search(path):
        score = max(score, HD_QUALITY)
    return score


def is_media_url(url: Optional[str], media_kind: MediaKind) -> bool:
    """Check that a URL is absolute HTTP(S) and plausibly points at media."""
    if not url:
        return False

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return False

    host = parsed.netloc.lower()
    if media_kind == MediaKind.VIDEO:
        path = parsed.path.lower()
        return any(ext in path for ext in VIDEO_EXTENSIONS) or any(h in host for h in VIDEO_HOSTS)
    return any(h in host for h in IMAGE_HOSTS)


def make_candidate(
    media_kind: MediaKind,
    raw_url: Optional[str],
    source: str,
    quality: Optional[int] = None,
    hd: bool = False,
    thumbnail_url: Optional[str] = None,
) -> Optional[MediaCandidate]:
    """
    Build a candidate, or None when the URL does not look like media.

    Without an explicit quality the score comes from the URL itself.
    """
    if not raw_url:
        return None
    url = unescape_url(raw_url.strip())
    if not is_media_url(url, media_kind):
        return None
    if quality is None:
        quality = quality_score(url, hd=hd)
    if thumbnail_url:
        thumbnail_url = unescape_url(thumbnail_url.strip())
        if not is_media_url(thumbnail_url, MediaKind.IMAGE):
            thumbnail_url = None
    return MediaCandidate(
        media_kind=media_kind,
        url=url,
        quality_score=quality,
        source=source,
        thumbnail_url=thumbnail_url,
    )


def find_meta(soup: BeautifulSoup, *names: str) -> Optional[str]:
    """Return the content of the first meta tag matching any property or name."""
    for name in names:
        tag = soup.find('meta', attrs={'property': name}) or soup.find('meta', attrs={'name': name})
        if tag and tag.get('content'):
            return tag['content'].strip() or None
    return None
