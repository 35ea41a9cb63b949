"""FastAPI server exposing media extraction over HTTP."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import AppConfig
from ..errors import ExtractionError, FailureKind
from ..scraper import InstagramScraper


logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'self'",
}


class DownloadRequest(BaseModel):
    """Request body for media extraction."""
    url: Any = None


def _error(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "code": code},
    )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Settings for the extraction pipeline

    Returns:
        Configured FastAPI app
    """
    config = config or AppConfig()

    app = FastAPI(
        title="Instagram Media Extractor",
        description="Extract media URLs from public Instagram posts, reels and videos",
        version=__version__,
    )

    # Allow all origins for mobile clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Every route shares one per-client ceiling
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[config.server.rate_limit],
    )
    app.add_middleware(SlowAPIMiddleware)

    app.state.scraper = InstagramScraper(config=config)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning("Rate limit exceeded for %s", get_remote_address(request))
        return _error(429, "Too many requests. Please try again later.", "RATE_LIMIT_EXCEEDED")

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(request: Request, exc: ExtractionError):
        logger.error("Extraction error %s: %s", exc.kind.value, exc.message)
        # Only classifier messages are meant for end users
        message = exc.message if exc.kind == FailureKind.INVALID_URL else exc.default_message
        return _error(exc.kind.http_status, message, exc.kind.value)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(400, "URL is required", "MISSING_URL")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, "Endpoint not found", "NOT_FOUND")
        return _error(exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error")
        return _error(500, "An unexpected error occurred", "SERVER_ERROR")

    @app.get("/health")
    async def health():
        """Liveness check."""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.post("/instagram/download")
    async def download(body: DownloadRequest, request: Request):
        """Extract the media URL for a post, reel or video."""
        if not body.url or not isinstance(body.url, str):
            return _error(400, "URL is required", "MISSING_URL")

        logger.info("Processing: %s", body.url)
        result = await request.app.state.scraper.extract(body.url)
        logger.info("Success: %s extracted", result.type)

        return {"status": "success", **result.to_response()}

    @app.get("/instagram/info")
    async def info():
        """API information."""
        return {
            "status": "success",
            "name": "Instagram Media Downloader API",
            "version": __version__,
            "supported_types": ["reels", "posts", "videos"],
            "disclaimer": (
                "This service only supports public content. "
                "Users are responsible for respecting copyright."
            ),
        }

    return app


def run_server(config: Optional[AppConfig] = None):
    """
    Run the API server.

    Args:
        config: Settings; host and port come from config.server
    """
    import uvicorn

    config = config or AppConfig()
    app = create_app(config)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
