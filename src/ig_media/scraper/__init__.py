"""Scraper module for extracting media from Instagram posts."""

from typing import Optional

from ..config import AppConfig
from ..models import ExtractionResult
from .instagram import InstagramScraper, is_private_page


async def extract(url: str, config: Optional[AppConfig] = None) -> ExtractionResult:
    """
    Convenience function to extract media from a URL.

    Args:
        url: Instagram post, reel or video URL
        config: Optional settings, defaults when omitted

    Returns:
        ExtractionResult with extracted data

    Raises:
        ExtractionError: subclass naming the failure kind
    """
    scraper = InstagramScraper(config=config)
    return await scraper.extract(url)


__all__ = [
    "InstagramScraper",
    "extract",
    "is_private_page",
]
