"""FastAPI application for the exchange engine.

Note: Authentication is not implemented at the application level. The
account named in a request body is trusted as the caller; put the service
behind a gateway that authenticates callers.
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from subdex import __version__
from subdex.api.endpoints import router
from subdex.logging import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SUBDEX_HOST", "0.0.0.0")
PORT = int(os.environ.get("SUBDEX_PORT", "8000"))
DEBUG = os.environ.get("SUBDEX_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("SUBDEX_LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

# Maximum request body size (64 KB)
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="subdex",
    description="Two-asset constant product exchange engine",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            size = int(content_length)
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
        if size > MAX_REQUEST_SIZE:
            return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - SUBDEX_HOST: Host to bind to (default: 0.0.0.0)
    - SUBDEX_PORT: Port to bind to (default: 8000)
    - SUBDEX_DEBUG: Enable debug/reload mode (default: false)
    - SUBDEX_LOG_LEVEL: Log level (default: INFO, DEBUG in debug mode)
    - SUBDEX_GENESIS: Path to a genesis JSON file (default: empty genesis)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "subdex.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
