"""Page fetcher with retry and HTTP status classification."""

import asyncio
import logging
import random
from typing import Optional, Sequence

import aiohttp

from ..errors import FetchError, NotFoundError, PrivateContentError
from ..models import FetchVariant, RawPage


logger = logging.getLogger(__name__)


# Browser identities rotated per request
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
]


class PageFetcher:
    """Retrieves raw markup for a URL."""

    # HTTP status codes that end a fetch without retrying
    STATUS_ERRORS = {
        401: PrivateContentError,
        403: PrivateContentError,
        404: NotFoundError,
    }

    def __init__(
        self,
        timeout: float = 15,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        max_redirects: int = 5,
        user_agents: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.max_redirects = max_redirects
        self.user_agents = list(user_agents or USER_AGENTS)
        self._rng = rng or random.Random()

    def build_headers(self) -> dict[str, str]:
        """Request headers with a randomly chosen browser identity."""
        return {
            "User-Agent": self._rng.choice(self.user_agents),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    async def fetch(self, url: str, variant: FetchVariant = FetchVariant.PAGE) -> RawPage:
        """
        Fetch a URL, retrying on transport failures and timeouts.

        Args:
            url: URL to retrieve
            variant: Which rendering of the post the URL is

        Returns:
            RawPage with the response body

        Raises:
            NotFoundError: on HTTP 404
            PrivateContentError: on HTTP 401 or 403
            FetchError: on any other failure, after retries where applicable
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                status, body = await self._get(url, self.build_headers())

            except aiohttp.TooManyRedirects as e:
                raise FetchError(f"Too many redirects for {url}") from e

            except (asyncio.TimeoutError, aiohttp.ClientError) as e:
                reason = f"Timeout after {self.timeout}s" if isinstance(e, asyncio.TimeoutError) else str(e)
                if attempt == self.max_attempts:
                    raise FetchError(f"Network error for {url}: {reason}") from e
                logger.warning(
                    "Fetch attempt %d/%d failed for %s: %s",
                    attempt, self.max_attempts, url, reason,
                )
                await asyncio.sleep(self.retry_delay)
                continue

            error_class = self.STATUS_ERRORS.get(status)
            if error_class:
                raise error_class()
            if status != 200:
                raise FetchError(f"HTTP {status} for {url}")

            return RawPage(html=body, url=url, variant=variant)

        raise FetchError(f"Max retries exceeded for {url}")

    async def _get(self, url: str, headers: dict[str, str]) -> tuple[int, str]:
        """Perform one GET and return the status and decoded body."""
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(
                url,
                headers=headers,
                allow_redirects=True,
                max_redirects=self.max_redirects,
            ) as response:
                body = await response.text(errors="replace")
                return response.status, body


async def fetch_page(url: str, variant: FetchVariant = FetchVariant.PAGE, timeout: float = 15) -> RawPage:
    """Fetch a single page with default retry settings."""
    fetcher = PageFetcher(timeout=timeout)
    return await fetcher.fetch(url, variant)
