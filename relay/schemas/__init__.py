"""Pydantic schemas for API requests and responses."""

from relay.schemas.uploads import (
    UploadChunkRequest,
    UploadChunkResponse,
    CompleteUploadRequest,
    CompleteUploadResponse
)
from relay.schemas.common import ErrorResponse

__all__ = [
    "UploadChunkRequest",
    "UploadChunkResponse",
    "CompleteUploadRequest",
    "CompleteUploadResponse",
    "ErrorResponse"
]
