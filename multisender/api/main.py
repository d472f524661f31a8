"""FastAPI application for the MultiSender toolkit.

The API is read-only: it prices batches and predicts factory addresses. It
never holds keys or submits transactions.
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from multisender import __version__
from multisender.api.endpoints import router

HOST = os.environ.get("MULTISENDER_HOST", "0.0.0.0")
PORT = int(os.environ.get("MULTISENDER_PORT", "8000"))
DEBUG = os.environ.get("MULTISENDER_DEBUG", "false").lower() in ("true", "1", "yes")

# A full 200-recipient batch is well under this
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="MultiSender",
    description="Batch transfer fee quotes and deterministic deployment addresses",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject malformed Content-Length headers and bodies larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and not content_length.isdecimal():
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - MULTISENDER_HOST: Host to bind to (default: 0.0.0.0)
    - MULTISENDER_PORT: Port to bind to (default: 8000)
    - MULTISENDER_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "multisender.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
