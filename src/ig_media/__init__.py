"""Instagram media extractor - find media URLs in public post pages."""

__version__ = "0.1.0"
