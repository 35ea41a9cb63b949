"""Validator module for classifying content URLs."""

from .url_validator import (
    URL_PATTERNS,
    STORY_PATTERN,
    canonical_url,
    classify_url,
    extract_identifier,
    is_supported,
)

__all__ = [
    "URL_PATTERNS",
    "STORY_PATTERN",
    "canonical_url",
    "classify_url",
    "extract_identifier",
    "is_supported",
]
