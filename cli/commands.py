"""Command handler functions for CLI operations."""

import os
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.exceptions import UploadError, UploadExhaustedError
from cli.models import ConfigCommand, UploadCommand
from cli.uploader import ChunkedUploader
from cli.utils import TerminalProgress, format_file_size

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.chunkrelay' / 'config.json'

_config: Optional[Config] = None
_uploader: Optional[ChunkedUploader] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config instance backed by ~/.chunkrelay/config.json
    """
    global _config
    if _config is None:
        _config = Config(DEFAULT_CONFIG_PATH)
    return _config


def get_uploader() -> ChunkedUploader:
    """
    Get or create global ChunkedUploader instance.

    Returns:
        ChunkedUploader built from the global config
    """
    global _uploader
    if _uploader is None:
        logger.debug("Creating new ChunkedUploader instance")
        _uploader = ChunkedUploader.from_config(get_config())
    return _uploader


def upload_files(file_paths: list[str], uploader: ChunkedUploader) -> tuple[list[str], int]:
    """
    Upload each file in turn, drawing a progress bar per file.

    Args:
        file_paths: Paths of the files to upload
        uploader: Uploader to use

    Returns:
        Tuple of (result lines, number of failed files)
    """
    results = []
    failures = 0

    for file_path in file_paths:
        if not os.path.exists(file_path):
            results.append(f"Error: File not found: {file_path}")
            failures += 1
            continue

        if not os.path.isfile(file_path):
            results.append(f"Error: Not a file: {file_path}")
            failures += 1
            continue

        filename = os.path.basename(file_path)
        progress = TerminalProgress(filename)
        uploader.progress = progress

        try:
            session = uploader.upload_file(file_path)
            results.append(
                f"Uploaded: {session.file_name} "
                f"(Size: {format_file_size(session.file_size)}, "
                f"Chunks: {session.total_chunks}, "
                f"Upload ID: {session.upload_id})"
            )
        except UploadExhaustedError as e:
            progress.finish()
            logger.error(f"Chunk {e.chunk_index} exhausted retries for {file_path} [upload_id={e.upload_id}]")
            results.append(f"Upload failed: {file_path}: {e} (chunk {e.chunk_index + 1})")
            failures += 1
        except UploadError as e:
            progress.finish()
            results.append(f"Upload failed: {file_path}: {e}")
            failures += 1
        except OSError as e:
            progress.finish()
            results.append(f"Error reading {file_path}: {e}")
            failures += 1
        finally:
            uploader.progress = None

    return results, failures


def handle_upload(cmd: UploadCommand, uploader: Optional[ChunkedUploader] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with file_list
        uploader: Optional ChunkedUploader for dependency injection (testing)

    Returns:
        Success or error message with upload results
    """
    logger.info(f"Executing upload command: {len(cmd.file_list)} files")
    if uploader is None:
        uploader = get_uploader()
    results, _ = upload_files(list(cmd.file_list), uploader)
    logger.debug("Upload command completed")
    return '\n'.join(results) if results else "No files uploaded."


def handle_config(cmd: ConfigCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'config' command.

    Args:
        cmd: ConfigCommand
        config: Optional Config for dependency injection (testing)

    Returns:
        Formatted configuration summary
    """
    if config is None:
        config = get_config()
    retry = config.get_retry_config()
    return (
        f"Config file: {config.config_path}\n"
        f"Relay URL: {config.get_relay_url()}\n"
        f"Chunk size: {format_file_size(config.get_chunk_size())}\n"
        f"Timeout: {config.get_timeout()}s\n"
        f"Max attempts: {retry['max_attempts']}\n"
        f"Backoff: {retry['retry_base_delay']}s x {retry['retry_backoff_multiplier']}"
    )
