"""Sequential chunked uploader talking to the upload relay."""

import base64
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

import httpx

from common.constants import CHUNK_SIZE_BYTES, COMPLETE_UPLOAD_PATH, UPLOAD_CHUNK_PATH
from common.logging_config import get_logger
from common.types import ChunkRange, UploadSession, UploadState
from cli.config import Config
from cli.exceptions import CompletionFailedError, RelayError, UploadExhaustedError

logger = get_logger(__name__)

ProgressCallback = Callable[[float, str], None]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_upload_id() -> str:
    """
    Generate an upload session token.

    Returns:
        Base-36 millisecond timestamp followed by a base-36 random suffix
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = _to_base36(random.getrandbits(52))
    return timestamp + suffix


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff."""

    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.multiplier < 0:
            raise ValueError("retry delays must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (0-based)."""
        return self.base_delay * self.multiplier ** attempt

    @classmethod
    def from_config(cls, config: Config) -> 'RetryPolicy':
        retry_config = config.get_retry_config()
        return cls(
            max_attempts=int(retry_config['max_attempts']),
            base_delay=float(retry_config['retry_base_delay']),
            multiplier=float(retry_config['retry_backoff_multiplier']),
        )


class ChunkedUploader:
    """Uploads a file chunk by chunk through the relay, then asks it to combine them."""

    def __init__(
        self,
        relay_url: str = "http://localhost:8000",
        chunk_size: int = CHUNK_SIZE_BYTES,
        retry_policy: Optional[RetryPolicy] = None,
        progress: Optional[ProgressCallback] = None,
        sleep: Callable[[float], None] = time.sleep,
        timeout: float = 30,
        session: Optional[httpx.Client] = None,
    ):
        """
        Initialize the uploader.

        Args:
            relay_url: Base URL of the relay
            chunk_size: Chunk size in bytes
            retry_policy: Retry policy for chunk uploads (default 3 attempts, 1s base, x2)
            progress: Optional callback receiving (percent, message) after every chunk
            sleep: Function used to wait between attempts
            timeout: Per-request timeout in seconds
            session: Optional preconfigured httpx client
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self.retry_policy = retry_policy or RetryPolicy()
        self.progress = progress
        self.sleep = sleep
        self.session = session or httpx.Client(base_url=relay_url, timeout=timeout)
        logger.info(
            f"Initialized ChunkedUploader [relay_url={relay_url}, chunk_size={chunk_size}, "
            f"max_attempts={self.retry_policy.max_attempts}]"
        )

    @classmethod
    def from_config(cls, config: Config, progress: Optional[ProgressCallback] = None) -> 'ChunkedUploader':
        return cls(
            relay_url=config.get_relay_url(),
            chunk_size=config.get_chunk_size(),
            retry_policy=RetryPolicy.from_config(config),
            progress=progress,
            timeout=config.get_timeout(),
        )

    def _report(self, percent: float, message: str) -> None:
        logger.debug(f"Progress {percent:.1f}%: {message}")
        if self.progress is not None:
            self.progress(percent, message)

    def upload_file(
        self,
        source: Union[str, Path, BinaryIO],
        file_name: Optional[str] = None
    ) -> UploadSession:
        """
        Upload a file in sequential chunks and combine it on the server.

        Args:
            source: Path to the file, or a readable and seekable binary file object
            file_name: Name announced to the relay (defaults to the file's base name)

        Returns:
            The finished UploadSession

        Raises:
            UploadExhaustedError: If a chunk failed after all attempts
            CompletionFailedError: If the completion call failed
        """
        if isinstance(source, (str, Path)):
            with open(source, 'rb') as f:
                return self.upload_file(f, file_name or os.path.basename(str(source)))

        if file_name is None:
            file_name = os.path.basename(getattr(source, 'name', 'upload.bin'))

        source.seek(0, os.SEEK_END)
        file_size = source.tell()

        session = UploadSession(
            upload_id=generate_upload_id(),
            file_name=file_name,
            file_size=file_size,
            chunk_size=self.chunk_size,
        )
        total_chunks = session.total_chunks
        logger.info(
            f"Starting upload: {file_name} size={file_size} chunks={total_chunks} "
            f"[upload_id={session.upload_id}]"
        )

        session.state = UploadState.UPLOADING
        try:
            for chunk_range in session.chunk_ranges():
                session.current_chunk = chunk_range.index
                chunk = self._read_chunk(source, chunk_range)
                self.upload_chunk(chunk, chunk_range.index, total_chunks, file_name, session.upload_id)

                progress = (chunk_range.index + 1) / total_chunks * 100
                self._report(progress, f"Uploading chunk {chunk_range.index + 1} of {total_chunks}")

            session.current_chunk = None
            session.state = UploadState.COMPLETING
            session.completion = self.complete_upload(file_name, total_chunks, session.upload_id)
        except Exception:
            session.state = UploadState.FAILED
            logger.error(
                f"Upload failed: {file_name} state={session.state.value} chunk={session.current_chunk} "
                f"[upload_id={session.upload_id}]"
            )
            raise

        session.state = UploadState.DONE
        self._report(100, 'Upload completed successfully!')
        logger.info(f"Upload completed: {file_name} [upload_id={session.upload_id}]")
        return session

    @staticmethod
    def _read_chunk(source: BinaryIO, chunk_range: ChunkRange) -> bytes:
        source.seek(chunk_range.start)
        data = source.read(chunk_range.size)
        if len(data) != chunk_range.size:
            raise IOError(
                f"Short read for chunk {chunk_range.index}: expected {chunk_range.size} bytes, got {len(data)}"
            )
        return data

    def upload_chunk(
        self,
        chunk: bytes,
        chunk_index: int,
        total_chunks: int,
        file_name: str,
        upload_id: str
    ) -> dict:
        """
        Send one chunk to the relay, retrying with exponential backoff.

        Args:
            chunk: Raw chunk bytes
            chunk_index: 0-based chunk index
            total_chunks: Number of chunks in the session
            file_name: Name of the file being uploaded
            upload_id: Session token

        Returns:
            Decoded relay response

        Raises:
            UploadExhaustedError: If every attempt failed
        """
        payload = {
            'chunk': base64.b64encode(chunk).decode('ascii'),
            'fileName': file_name,
            'chunkIndex': chunk_index,
            'totalChunks': total_chunks,
            'uploadId': upload_id,
        }
        max_attempts = self.retry_policy.max_attempts

        last_exception = None
        for attempt in range(max_attempts):
            try:
                response = self.session.post(UPLOAD_CHUNK_PATH, json=payload)
                if not response.is_success:
                    raise RelayError(f"Server error: {response.status_code}", response.status_code)
                return self._decode(response)

            except (httpx.HTTPError, RelayError) as e:
                last_exception = e
                logger.warning(
                    f"Upload attempt {attempt + 1}/{max_attempts} failed for chunk {chunk_index}: {e} "
                    f"[upload_id={upload_id}]"
                )
                if attempt == max_attempts - 1:
                    break

                delay = self.retry_policy.delay_for(attempt)
                logger.debug(f"Retrying chunk {chunk_index} in {delay}s")
                self.sleep(delay)

        raise UploadExhaustedError(chunk_index, max_attempts, upload_id) from last_exception

    @staticmethod
    def _decode(response: httpx.Response) -> dict:
        try:
            result = response.json()
        except ValueError as e:
            raise RelayError("Malformed relay response", response.status_code) from e
        if not isinstance(result, dict) or result.get('success') is not True:
            raise RelayError("Malformed relay response", response.status_code)
        return result

    def complete_upload(self, file_name: str, total_chunks: int, upload_id: str) -> dict:
        """
        Ask the relay to combine the uploaded chunks. Not retried.

        Args:
            file_name: Name of the uploaded file
            total_chunks: Number of chunks sent
            upload_id: Session token

        Returns:
            Decoded relay response

        Raises:
            CompletionFailedError: If the relay did not confirm completion
        """
        try:
            response = self.session.post(
                COMPLETE_UPLOAD_PATH,
                json={
                    'fileName': file_name,
                    'totalChunks': total_chunks,
                    'uploadId': upload_id,
                }
            )
        except httpx.HTTPError as e:
            raise CompletionFailedError(f"Failed to complete upload: {e}") from e

        if not response.is_success:
            logger.warning(f"Completion rejected: status={response.status_code} [upload_id={upload_id}]")
            raise CompletionFailedError(status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise CompletionFailedError("Failed to complete upload: malformed response",
                                        response.status_code) from e

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
