"""Instagram extraction pipeline: classify, fetch, extract, select."""

import logging
import re
from typing import List, Optional
from urllib.parse import quote

from ..config import AppConfig
from ..errors import (
    ExtractionFailedError,
    FetchError,
    NotFoundError,
    PrivateContentError,
)
from ..extractor import run_extractors, select
from ..extractor.selector import Selection
from ..fetcher import PageFetcher
from ..models import ContentKind, ContentReference, ExtractionResult, FetchVariant, RawPage
from ..validator import classify_url, is_supported


logger = logging.getLogger(__name__)

OEMBED_ENDPOINT = "https://api.instagram.com/oembed/?url="

# Explicit access restriction signals in fetched markup
PRIVATE_PHRASE = "account is private"
PRIVATE_FLAG = re.compile(r'\\?"?is_private\\?"?\s*:\s*true\b', re.IGNORECASE)


def is_private_page(html: str) -> bool:
    """Check for an explicit private-account marker."""
    return PRIVATE_PHRASE in html.lower() or PRIVATE_FLAG.search(html) is not None


class InstagramScraper:
    """Extracts a media URL from a public Instagram post, reel or video."""

    platform = "instagram"

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        self.config = config or AppConfig()
        fetcher_cfg = self.config.fetcher
        self.fetcher = fetcher or PageFetcher(
            timeout=fetcher_cfg.timeout,
            max_attempts=fetcher_cfg.max_attempts,
            retry_delay=fetcher_cfg.retry_delay,
            max_redirects=fetcher_cfg.max_redirects,
        )

    def supports(self, url: str) -> bool:
        """Check if URL is a supported Instagram content URL."""
        return is_supported(url)

    def plan_variants(self, ref: ContentReference) -> List[tuple[FetchVariant, str]]:
        """
        Fetch variants to try, in order.

        Video-kind references try the embed page first when configured;
        everything else starts with the canonical page. The oEmbed
        endpoint comes last when enabled.
        """
        page = (FetchVariant.PAGE, ref.canonical_url)
        embed = (FetchVariant.EMBED, ref.embed_url)

        if ref.kind.expects_video and self.config.extraction.embed_first:
            variants = [embed, page]
        else:
            variants = [page, embed]

        if self.config.extraction.oembed_fallback:
            variants.append(
                (FetchVariant.OEMBED, OEMBED_ENDPOINT + quote(ref.canonical_url, safe=''))
            )
        return variants

    async def extract(self, url: str) -> ExtractionResult:
        """
        Extract media from an Instagram URL.

        Args:
            url: User-supplied post, reel or video URL

        Returns:
            ExtractionResult with media URL, thumbnail and caption

        Raises:
            InvalidUrlError: URL is not a supported content URL
            PrivateContentError: content is private or access was denied
            NotFoundError: content does not exist
            FetchError: every fetch failed on the network
            ExtractionFailedError: pages were fetched but held no usable media
        """
        ref = classify_url(url)
        logger.info("Extracting %s %s", ref.kind.value, ref.identifier)

        tried: List[str] = []
        fetched = False
        last_error: Optional[FetchError] = None

        for variant, target in self.plan_variants(ref):
            tried.append(variant.value)
            try:
                page = await self.fetcher.fetch(target, variant)
            except (NotFoundError, PrivateContentError) as e:
                # After a successful fetch, denials fall through to ExtractionFailed
                if not fetched:
                    raise
                logger.info("%s fetch refused for %s: %s", variant.value, ref.identifier, e.kind.value)
                continue
            except FetchError as e:
                logger.warning("%s fetch failed for %s: %s", variant.value, ref.identifier, e)
                last_error = e
                continue

            fetched = True
            selection = self._extract_page(ref, page)
            if selection:
                logger.info("Success via %s for %s", variant.value, ref.identifier)
                return self._build_result(ref, selection)
            logger.info("No media found via %s for %s", variant.value, ref.identifier)

        if not fetched and last_error is not None:
            raise last_error

        logger.warning(
            "Extraction failed for %s: no usable media via %s",
            ref.identifier, ", ".join(tried),
        )
        raise ExtractionFailedError()

    def _extract_page(self, ref: ContentReference, page: RawPage) -> Optional[Selection]:
        # An explicit private marker wins over any candidate
        if is_private_page(page.html):
            logger.info("Private marker found via %s for %s", page.variant.value, ref.identifier)
            raise PrivateContentError("This account is private")

        candidates, metadata = run_extractors(page)
        return select(candidates, ref.kind, metadata)

    def _build_result(self, ref: ContentReference, selection: Selection) -> ExtractionResult:
        media_type = selection.candidate.media_kind.value
        if ref.kind == ContentKind.REEL:
            media_type = "reel"

        return ExtractionResult(
            type=media_type,
            media_url=selection.candidate.url,
            thumbnail_url=selection.thumbnail_url,
            caption=selection.caption,
        )
