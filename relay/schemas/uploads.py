"""Pydantic schemas for the upload relay endpoints."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UploadChunkRequest(BaseModel):
    """Request model for a single chunk."""
    model_config = ConfigDict(populate_by_name=True)

    chunk: Optional[str] = None
    file_name: str = Field(alias="fileName")
    chunk_index: int = Field(alias="chunkIndex", ge=0)
    total_chunks: int = Field(alias="totalChunks", ge=0)
    upload_id: str = Field(alias="uploadId")


class UploadChunkResponse(BaseModel):
    """Response model for a relayed chunk."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    chunk_index: int = Field(alias="chunkIndex")
    message: str


class CompleteUploadRequest(BaseModel):
    """Request model for the combine call."""
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    total_chunks: int = Field(alias="totalChunks", ge=0)
    upload_id: str = Field(alias="uploadId")


class CompleteUploadResponse(BaseModel):
    """Response model for a completed upload."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    file_name: str = Field(alias="fileName")
