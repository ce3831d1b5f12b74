"""Upload relay routes: chunk forwarding and completion."""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from common.constants import COMPLETE_UPLOAD_PATH, CORS_HEADERS, UPLOAD_CHUNK_PATH
from common.logging_config import get_logger
from relay.exceptions import (
    ChunkMissingError,
    InternalRelayError,
    InvalidRequestBodyError,
    RelayException
)
from relay.schemas import (
    CompleteUploadRequest,
    CompleteUploadResponse,
    ErrorResponse,
    UploadChunkRequest,
    UploadChunkResponse
)
from relay.upstream_client import UpstreamClient, get_upstream_client

logger = get_logger(__name__)

router = APIRouter(tags=["Uploads"])

UNSUPPORTED_METHODS = ["GET", "PUT", "PATCH", "DELETE"]


async def _read_json_object(request: Request) -> dict:
    """Parse the request body as a JSON object."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestBodyError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise InvalidRequestBodyError("Request body must be a JSON object")
    return body


async def preflight() -> Response:
    """
    Answer CORS preflight requests.
    Returns 200 with an empty body whatever the payload.
    """
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


async def method_not_allowed() -> JSONResponse:
    """Reject methods other than POST and OPTIONS."""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=ErrorResponse(error="Method not allowed", code="METHOD_NOT_ALLOWED").model_dump(),
        headers=CORS_HEADERS
    )


for _path in (UPLOAD_CHUNK_PATH, COMPLETE_UPLOAD_PATH):
    router.add_api_route(_path, preflight, methods=["OPTIONS"], include_in_schema=False)
    router.add_api_route(_path, method_not_allowed, methods=UNSUPPORTED_METHODS, include_in_schema=False)


@router.post(UPLOAD_CHUNK_PATH, response_model=UploadChunkResponse, response_model_by_alias=True)
async def upload_chunk(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream_client)
):
    """
    Forward one chunk to the storage server.

    Body:
        - chunk: base64-encoded chunk bytes (required, non-empty)
        - fileName, chunkIndex, totalChunks, uploadId: session metadata

    Returns:
        - success: always true
        - chunkIndex: index of the relayed chunk
        - message: human readable confirmation

    Raises:
        - 400: No chunk data or malformed body
        - 500: Upstream failure or internal error
    """
    body = await _read_json_object(request)

    if not body.get('chunk'):
        raise ChunkMissingError("No chunk data provided")

    try:
        chunk_request = UploadChunkRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestBodyError(f"Invalid chunk request: {e.error_count()} validation error(s)") from e

    logger.info(
        f"Processing chunk {chunk_request.chunk_index + 1}/{chunk_request.total_chunks} "
        f"for file: {chunk_request.file_name} [upload_id={chunk_request.upload_id}]"
    )

    try:
        await upstream.upload_chunk(chunk_request.model_dump(by_alias=True))
    except RelayException:
        raise
    except Exception as e:
        logger.error(f"Upload error: {e}", exc_info=True)
        raise InternalRelayError(str(e)) from e

    return UploadChunkResponse(
        chunk_index=chunk_request.chunk_index,
        message=f"Chunk {chunk_request.chunk_index + 1} uploaded successfully"
    )


@router.post(COMPLETE_UPLOAD_PATH, response_model=CompleteUploadResponse, response_model_by_alias=True)
async def complete_upload(
    request: Request,
    upstream: UpstreamClient = Depends(get_upstream_client)
):
    """
    Ask the storage server to combine the uploaded chunks.

    Body:
        - fileName, totalChunks, uploadId: session metadata

    Returns:
        - success: always true
        - message: human readable confirmation
        - fileName: name of the combined file

    Raises:
        - 400: Malformed body
        - 500: Upstream failure or internal error
    """
    body = await _read_json_object(request)

    try:
        complete_request = CompleteUploadRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestBodyError(f"Invalid completion request: {e.error_count()} validation error(s)") from e

    logger.info(
        f"Completing upload for: {complete_request.file_name}, total chunks: {complete_request.total_chunks} "
        f"[upload_id={complete_request.upload_id}]"
    )

    try:
        await upstream.combine_chunks(complete_request.model_dump(by_alias=True))
    except RelayException:
        raise
    except Exception as e:
        logger.error(f"Complete upload error: {e}", exc_info=True)
        raise InternalRelayError(str(e)) from e

    return CompleteUploadResponse(
        message="File upload completed successfully!",
        file_name=complete_request.file_name
    )
