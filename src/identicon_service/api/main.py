"""Identicon Service — FastAPI Application.

This module is the single entry point for the web service.  It defines the
FastAPI ``app`` instance, the one public route, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The route is a thin adapter around the pure pipeline in
:mod:`identicon_service.core`:

- **Parsing and validation** happen in :func:`~identicon_service.core.options.resolve`.
- **Image generation** happens in :func:`~identicon_service.core.pipeline.build_identicon`.
- **Status codes** are decided here and only here, by mapping the core's
  exception types onto :class:`HTTPException`.
- **Configuration** (background colour, JPEG quality, cache lifetime, scale
  limit) comes from :data:`~identicon_service.core.config.config`.

The handler is a plain ``def`` so FastAPI runs the CPU-bound rendering in its
thread pool instead of on the event loop.

Endpoints
---------
========  ========  ============================================
Method    Path      Purpose
========  ========  ============================================
GET       ``/``     Identicon image, or the usage guide
========  ========  ============================================

Every other method is answered with 405 and every other path with 404.

Usage
-----
CLI (installed entry point)::

    identicon-service

Direct invocation::

    python -m identicon_service.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from identicon_service import __version__
from identicon_service.api.usage import usage_guide
from identicon_service.core.config import config
from identicon_service.core.errors import (
    EncodingError,
    MissingSeedError,
    ParseError,
    UnprocessableOptionsError,
)
from identicon_service.core.options import resolve
from identicon_service.core.pipeline import build_identicon

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET,HEAD,OPTIONS"

# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the effective rendering settings on startup and note shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    logger.info(
        f"Identicon service {__version__} ready "
        f"(background={config.background}, max_scale={config.max_scale}, "
        f"jpeg_quality={config.jpeg_quality})"
    )

    yield  # Application runs here.

    logger.info("Identicon service shutting down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Identicon Service",
    description="Deterministic identicon images generated from any string.",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def reject_other_methods(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Answer anything but GET with 405, whatever the path."""
    if request.method != "GET":
        return JSONResponse(
            {"detail": "Method Not Allowed"},
            status_code=405,
            headers={"Allow": "GET"},
        )
    return await call_next(request)


@app.middleware("http")
async def log_request(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log method, path and client address of every incoming request."""
    client = request.client.host if request.client else "unknown client"
    logger.info(f"{request.method} {request.url.path}, client: {client}")
    return await call_next(request)


# Added last so it wraps everything above and answers CORS preflight
# requests before the method check sees them.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)


def _cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
    }


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=Response)
def identicon(request: Request) -> Response:
    """Generate an identicon from the query string.

    The raw query string is handed to :func:`resolve` unchanged so that
    parsing rules (duplicate parameters, digit-only integers, case-sensitive
    formats) live in the core.

    Args:
        request: The incoming request; only its query string is used.

    Returns:
        The encoded image with caching and CORS headers, or the plain-text
        usage guide when no ``hash`` was given.

    Raises:
        HTTPException: 400 for a malformed query string, 422 when ``size``
            exceeds ``scale`` (or ``scale`` exceeds the configured maximum),
            500 when the image cannot be encoded.
    """
    try:
        options = resolve(request.url.query, max_scale=config.max_scale)
    except MissingSeedError:
        return PlainTextResponse(usage_guide(config.max_scale), headers=_cors_headers())
    except ParseError as e:
        logger.warning(f"Bad request: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UnprocessableOptionsError as e:
        logger.warning(f"Unprocessable options: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        encoded = build_identicon(
            options,
            background=config.background,
            jpeg_quality=config.jpeg_quality,
        )
    except EncodingError as e:
        logger.error(f"Error encoding identicon: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to encode image") from e

    headers = _cors_headers()
    headers["Cache-Control"] = f"public,max-age={config.cache_max_age}"
    return Response(content=encoded.data, media_type=encoded.mime_type, headers=headers)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from
    :data:`~identicon_service.core.config.config` (``IDENTICON_SERVER_HOST``,
    ``IDENTICON_SERVER_PORT`` and ``IDENTICON_LOG_LEVEL``).  Defaults to
    ``0.0.0.0:8787`` at INFO.

    This function is registered as the ``identicon-service`` console script
    in ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "identicon_service.api.main:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
