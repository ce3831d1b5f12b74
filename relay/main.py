"""Entry point for the upload relay service."""

import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.constants import CORS_HEADERS
from common.logging_config import setup_logging
from relay.config import RELAY_HOST, RELAY_PORT, RELAY_UPSTREAM_URL
from relay.exceptions import (
    ChunkMissingError,
    InternalRelayError,
    InvalidRequestBodyError,
    RelayException
)
from relay.routes import upload_router
from relay.schemas import ErrorResponse

logger = setup_logging('relay')


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Relay service starting up, forwarding to {RELAY_UPSTREAM_URL}")
    yield
    logger.info("Relay service shutting down")


app = FastAPI(
    lifespan=lifespan,
    title="ChunkRelay Upload Relay",
    description="Stateless relay forwarding chunked uploads to the storage server",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and attach CORS headers to every response.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value

    return response


@app.exception_handler(ChunkMissingError)
async def chunk_missing_handler(request: Request, exc: ChunkMissingError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Chunk missing error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=str(exc), code="CHUNK_MISSING").model_dump()
    )


@app.exception_handler(InvalidRequestBodyError)
async def invalid_request_body_handler(request: Request, exc: InvalidRequestBodyError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid request body: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=str(exc), code="INVALID_REQUEST").model_dump()
    )


@app.exception_handler(InternalRelayError)
async def internal_error_handler(request: Request, exc: InternalRelayError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Internal relay error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=f"Internal server error: {exc}", code="INTERNAL_ERROR").model_dump()
    )


@app.exception_handler(RelayException)
async def relay_exception_handler(request: Request, exc: RelayException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Relay exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=f"Internal server error: {exc}", code="INTERNAL_ERROR").model_dump()
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Map any uncaught exception to a 500.
    Runs outside the request middleware, so CORS and request id headers are set here.
    """
    request_id = getattr(request.state, 'request_id', None) or str(uuid.uuid4())
    logger.error(
        f"Unhandled exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=f"Internal server error: {exc}", code="INTERNAL_ERROR").model_dump(),
        headers={**CORS_HEADERS, "X-Request-ID": request_id}
    )


app.include_router(upload_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "relay"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "relay.main:app",
        host=RELAY_HOST,
        port=RELAY_PORT
    )


if __name__ == "__main__":
    main()
