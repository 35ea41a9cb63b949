"""Fetcher module for retrieving post markup."""

from .page_fetcher import USER_AGENTS, PageFetcher, fetch_page

__all__ = [
    "USER_AGENTS",
    "PageFetcher",
    "fetch_page",
]
