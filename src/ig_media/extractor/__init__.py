"""Media extraction module - find media candidates in fetched markup."""

import logging
from typing import List

from bs4 import BeautifulSoup

from ..models import FetchVariant, MediaCandidate, PageMetadata, RawPage
from .base import Extractor
from .embed import extract_embed_markers
from .meta import extract_meta_tags, read_page_metadata
from .oembed import extract_oembed, read_oembed_metadata
from .selector import Selection, clean_caption, select, select_candidate
from .structured import extract_structured_data


logger = logging.getLogger(__name__)

# Registration order breaks quality ties, first wins
EXTRACTORS: List[Extractor] = [
    extract_structured_data,
    extract_embed_markers,
    extract_meta_tags,
    extract_oembed,
]


def get_all_extractors() -> List[Extractor]:
    return list(EXTRACTORS)


def run_extractors(page: RawPage) -> tuple[List[MediaCandidate], PageMetadata]:
    """Run every extractor over a page.

    Returns:
        (candidates, metadata) - candidates in registration order and the
        page's description and preview image
    """
    soup = BeautifulSoup(page.html, 'html.parser')
    candidates: List[MediaCandidate] = []

    for extractor in EXTRACTORS:
        found = extractor(page, soup)
        logger.debug("%s: found %d candidates", extractor.__name__, len(found))
        candidates.extend(found)

    if page.variant == FetchVariant.OEMBED:
        metadata = read_oembed_metadata(page)
    else:
        metadata = read_page_metadata(page, soup)

    return candidates, metadata


__all__ = [
    "EXTRACTORS",
    "Selection",
    "clean_caption",
    "extract_embed_markers",
    "extract_meta_tags",
    "extract_oembed",
    "extract_structured_data",
    "get_all_extractors",
    "run_extractors",
    "select",
    "select_candidate",
]
