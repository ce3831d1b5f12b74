"""Shared data type definitions (UploadSession, ChunkRange)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class UploadState(str, Enum):
    """Lifecycle of a single upload session."""
    IDLE = "idle"
    UPLOADING = "uploading"
    COMPLETING = "completing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ChunkRange:
    """
    Byte range of one chunk within the source file.
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass
class UploadSession:
    """
    One file transfer: every chunk upload plus the completion call.
    """
    upload_id: str
    file_name: str
    file_size: int
    chunk_size: int
    state: UploadState = UploadState.IDLE
    current_chunk: Optional[int] = None
    completion: dict = field(default_factory=dict)

    @property
    def total_chunks(self) -> int:
        return -(-self.file_size // self.chunk_size)

    def chunk_ranges(self) -> Iterator[ChunkRange]:
        """Yield the chunk ranges in upload order."""
        for index in range(self.total_chunks):
            start = index * self.chunk_size
            end = min(start + self.chunk_size, self.file_size)
            yield ChunkRange(index=index, start=start, end=end)
