"""Fallback extractor for Open Graph meta tags."""

from typing import List

from bs4 import BeautifulSoup

from ..models import MediaCandidate, MediaKind, PageMetadata, RawPage
from .base import META_QUALITY, find_meta, make_candidate


SOURCE = "meta_tags"

VIDEO_PROPERTIES = ('og:video', 'og:video:url', 'og:video:secure_url')


def extract_meta_tags(page: RawPage, soup: BeautifulSoup) -> List[MediaCandidate]:
    """Read og:video and og:image tags at a fixed low quality."""
    og_image = find_meta(soup, 'og:image')
    candidates: List[MediaCandidate] = []
    seen = set()

    for prop in VIDEO_PROPERTIES:
        candidate = make_candidate(
            MediaKind.VIDEO,
            find_meta(soup, prop),
            SOURCE,
            quality=META_QUALITY,
            thumbnail_url=og_image,
        )
        if candidate and candidate.url not in seen:
            seen.add(candidate.url)
            candidates.append(candidate)

    image = make_candidate(MediaKind.IMAGE, og_image, SOURCE, quality=META_QUALITY)
    if image:
        candidates.append(image)

    return candidates


def read_page_metadata(page: RawPage, soup: BeautifulSoup) -> PageMetadata:
    """Description and preview image used for caption and thumbnail."""
    return PageMetadata(
        description=find_meta(soup, 'og:description', 'description'),
        og_image=find_meta(soup, 'og:image'),
    )
