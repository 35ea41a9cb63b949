"""Extractor for the simplified embed rendering of a post."""

import re
from typing import List

from bs4 import BeautifulSoup

from ..models import FetchVariant, MediaCandidate, MediaKind, RawPage
from .base import make_candidate


SOURCE = "embed_page"

VIDEO_URL_PATTERN = re.compile(r'"video_url"\s*:\s*"([^"]+)"')
IMAGE_CLASS = "EmbeddedMediaImage"


def extract_embed_markers(page: RawPage, soup: BeautifulSoup) -> List[MediaCandidate]:
    """Look for the embed page's media image and video markers."""
    if page.variant != FetchVariant.EMBED:
        return []

    image_tag = soup.find('img', class_=IMAGE_CLASS)
    image_url = image_tag.get('src') if image_tag else None

    video_urls = [m.group(1) for m in VIDEO_URL_PATTERN.finditer(page.html)]
    video_tag = soup.find('video', src=re.compile(r'\.mp4', re.IGNORECASE))
    if video_tag:
        video_urls.append(video_tag['src'])

    candidates: List[MediaCandidate] = []
    seen = set()
    for raw_url in video_urls:
        candidate = make_candidate(MediaKind.VIDEO, raw_url, SOURCE, thumbnail_url=image_url)
        if candidate and candidate.url not in seen:
            seen.add(candidate.url)
            candidates.append(candidate)

    image = make_candidate(MediaKind.IMAGE, image_url, SOURCE)
    if image:
        candidates.append(image)

    return candidates
