"""Rank candidates and resolve caption and thumbnail."""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..models import ContentKind, MediaCandidate, MediaKind, PageMetadata


logger = logging.getLogger(__name__)

# "1,204 likes, 12 comments - " style engagement prefix
_ENGAGEMENT_PREFIX = re.compile(
    r'^\s*[\d,.]+\s*[KMB]?\s+likes?\s*,\s*[\d,.]+\s*[KMB]?\s+comments?\s*-\s*',
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Selection:
    """The chosen candidate with its resolved caption and thumbnail."""

    candidate: MediaCandidate
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None


def _best(candidates: List[MediaCandidate]) -> MediaCandidate:
    # max() keeps the first of equal scores, i.e. the earliest registered extractor
    return max(candidates, key=lambda c: c.quality_score)


def select_candidate(
    candidates: Iterable[MediaCandidate],
    declared_kind: ContentKind,
) -> Optional[MediaCandidate]:
    """
    Pick the best candidate.

    Video beats image whenever any video candidate exists; within a kind
    the highest quality score wins.

    Args:
        candidates: Candidates in extractor registration order
        declared_kind: Kind implied by the URL shape

    Returns:
        The chosen candidate, or None when there are no candidates
    """
    candidates = list(candidates)
    videos = [c for c in candidates if c.media_kind == MediaKind.VIDEO]
    images = [c for c in candidates if c.media_kind == MediaKind.IMAGE]

    if videos:
        if not declared_kind.expects_video:
            logger.debug("Found video on a %s page", declared_kind.value)
        return _best(videos)
    if images:
        return _best(images)
    return None


def clean_caption(description: Optional[str]) -> Optional[str]:
    """Strip the engagement prefix from a description; empty means absent."""
    if not description:
        return None
    caption = _ENGAGEMENT_PREFIX.sub('', description, count=1).strip()
    return caption or None


def resolve_thumbnail(candidate: MediaCandidate, metadata: PageMetadata) -> Optional[str]:
    """An image is its own thumbnail; videos prefer their own preview over og:image."""
    if candidate.media_kind == MediaKind.IMAGE:
        return candidate.url
    return candidate.thumbnail_url or metadata.og_image


def select(
    candidates: Iterable[MediaCandidate],
    declared_kind: ContentKind,
    metadata: PageMetadata,
) -> Optional[Selection]:
    """Choose a candidate and attach caption and thumbnail."""
    candidate = select_candidate(candidates, declared_kind)
    if candidate is None:
        return None
    return Selection(
        candidate=candidate,
        thumbnail_url=resolve_thumbnail(candidate, metadata),
        caption=clean_caption(metadata.description),
    )
