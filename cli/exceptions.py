"""Exceptions raised by the chunked uploader."""

from typing import Optional


class UploadError(Exception):
    """
    Base exception class for all upload errors.
    """
    pass


class RelayError(UploadError):
    """
    Raised when the relay answers with a non-2xx status or a malformed body.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UploadExhaustedError(UploadError):
    """
    Raised when a chunk still fails after every retry attempt.
    """

    def __init__(self, chunk_index: int, attempts: int, upload_id: str):
        super().__init__(f"Failed to upload chunk after {attempts} attempts")
        self.chunk_index = chunk_index
        self.attempts = attempts
        self.upload_id = upload_id


class CompletionFailedError(UploadError):
    """
    Raised when the relay does not confirm the completion call.
    """

    def __init__(self, message: str = "Failed to complete upload", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
