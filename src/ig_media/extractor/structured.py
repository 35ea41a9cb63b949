"""Extractor for media URLs embedded in the page's internal JSON data."""

import re
from typing import List

from bs4 import BeautifulSoup

from ..models import MediaCandidate, MediaKind, RawPage
from .base import make_candidate


SOURCE = "structured_data"

# (pattern, explicit HD marker)
VIDEO_PATTERNS = [
    (re.compile(r'"playable_url_quality_hd"\s*:\s*"([^"]+)"'), True),
    (re.compile(r'"video_url"\s*:\s*"([^"]+)"'), False),
    (re.compile(r'"playable_url"\s*:\s*"([^"]+)"'), False),
    (re.compile(r'"video_versions"\s*:\s*\[[^\]]*?"url"\s*:\s*"([^"]+)"'), False),
    (re.compile(r'"contentUrl"\s*:\s*"([^"]+\.mp4[^"]*)"'), False),
]

IMAGE_PATTERNS = [
    re.compile(r'"display_url"\s*:\s*"([^"]+)"'),
    re.compile(r'"src"\s*:\s*"([^"]*scontent[^"]+)"'),
]


def extract_structured_data(page: RawPage, soup: BeautifulSoup) -> List[MediaCandidate]:
    """Scan raw markup for well-known media keys of the platform's data model."""
    html = page.html
    seen = set()

    images: List[MediaCandidate] = []
    for pattern in IMAGE_PATTERNS:
        for match in pattern.finditer(html):
            candidate = make_candidate(MediaKind.IMAGE, match.group(1), SOURCE)
            if candidate and candidate.url not in seen:
                seen.add(candidate.url)
                images.append(candidate)

    # First image doubles as the video preview
    thumbnail = images[0].url if images else None

    videos: List[MediaCandidate] = []
    for pattern, hd in VIDEO_PATTERNS:
        for match in pattern.finditer(html):
            candidate = make_candidate(
                MediaKind.VIDEO,
                match.group(1),
                SOURCE,
                hd=hd,
                thumbnail_url=thumbnail,
            )
            if candidate and candidate.url not in seen:
                seen.add(candidate.url)
                videos.append(candidate)

    return videos + images
