"""Extractor for the JSON oEmbed endpoint."""

import json
import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from ..models import FetchVariant, MediaCandidate, MediaKind, PageMetadata, RawPage
from .base import META_QUALITY, make_candidate


logger = logging.getLogger(__name__)

SOURCE = "oembed"


def _load(page: RawPage) -> Optional[dict]:
    try:
        data = json.loads(page.html)
    except json.JSONDecodeError as e:
        logger.debug("oEmbed response for %s is not JSON: %s", page.url, e)
        return None
    return data if isinstance(data, dict) else None


def extract_oembed(page: RawPage, soup: BeautifulSoup) -> List[MediaCandidate]:
    """oEmbed only exposes a thumbnail, offered as a low quality image."""
    if page.variant != FetchVariant.OEMBED:
        return []

    data = _load(page)
    if not data:
        return []

    image = make_candidate(MediaKind.IMAGE, data.get('thumbnail_url'), SOURCE, quality=META_QUALITY)
    return [image] if image else []


def read_oembed_metadata(page: RawPage) -> PageMetadata:
    data = _load(page) or {}
    return PageMetadata(
        description=data.get('title') or None,
        og_image=data.get('thumbnail_url') or None,
    )
