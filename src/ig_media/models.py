"""Data models for content references, fetched pages and extraction results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    """Content type declared by the URL path shape."""

    POST = "post"
    REEL = "reel"
    LONGFORM = "longform"

    @property
    def path(self) -> str:
        """Path segment used in canonical URLs."""
        return _KIND_PATHS[self]

    @property
    def expects_video(self) -> bool:
        return self in (ContentKind.REEL, ContentKind.LONGFORM)


_KIND_PATHS = {
    ContentKind.POST: "p",
    ContentKind.REEL: "reel",
    ContentKind.LONGFORM: "tv",
}


class MediaKind(str, Enum):
    """Kind of media a candidate points at."""

    VIDEO = "video"
    IMAGE = "image"


class FetchVariant(str, Enum):
    """Which rendering of a post was fetched."""

    PAGE = "page"        # Canonical post page
    EMBED = "embed"      # Simplified embed rendering
    OEMBED = "oembed"    # JSON oEmbed endpoint


@dataclass(frozen=True)
class ContentReference:
    """A validated reference to a single piece of content."""

    kind: ContentKind
    identifier: str
    canonical_url: str

    @property
    def embed_url(self) -> str:
        return f"https://www.instagram.com/p/{self.identifier}/embed/"


@dataclass(frozen=True)
class RawPage:
    """Markup retrieved for one fetch variant."""

    html: str
    url: str
    variant: FetchVariant = FetchVariant.PAGE
    fetched_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class MediaCandidate:
    """A tentative media reference produced by one extractor."""

    media_kind: MediaKind
    url: str
    quality_score: int
    source: str
    thumbnail_url: Optional[str] = None

    def __post_init__(self):
        if not self.url:
            raise ValueError("candidate url must not be empty")
        if self.quality_score < 0:
            raise ValueError("quality_score must be >= 0")


@dataclass(frozen=True)
class PageMetadata:
    """Descriptive values read once per page for caption and thumbnail."""

    description: Optional[str] = None
    og_image: Optional[str] = None


class ExtractionResult(BaseModel):
    """Final answer of one extraction."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="reel, video or image")
    media_url: str = Field(..., min_length=1, description="Direct media URL")
    thumbnail_url: Optional[str] = Field(None, description="Preview image URL")
    caption: Optional[str] = Field(None, description="Post caption")

    def to_response(self) -> dict:
        """Serialize for the HTTP layer, dropping absent optional fields."""
        return self.model_dump(exclude_none=True)
