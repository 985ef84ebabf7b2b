"""FastAPI application exposing the swap math.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swapmath import __version__
from swapmath.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SWAPMATH_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAPMATH_PORT", "8000"))
DEBUG = os.environ.get("SWAPMATH_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB); a pool with thousands of ticks fits easily
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Swap Math",
    description="Concentrated liquidity swap step and swap simulation",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length is None:
        return await call_next(request)
    if not (content_length.isascii() and content_length.isdigit()):
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging() -> None:
    """Configure structlog for the API process."""
    log_level = logging.DEBUG if DEBUG else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SWAPMATH_HOST: Host to bind to (default: 0.0.0.0)
    - SWAPMATH_PORT: Port to bind to (default: 8000)
    - SWAPMATH_DEBUG: Enable debug/reload mode (default: false)
    - SWAPMATH_MAX_STEPS: Step limit per simulated swap (default: 10000)
    - SWAPMATH_LOG_STEPS: Log every swap step (default: false)
    """
    configure_logging()
    uvicorn.run(
        "swapmath.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
