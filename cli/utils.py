"""Utility functions for CLI operations."""

import sys
from typing import Optional, TextIO

from cli.constants import GREEN, PROGRESS_BAR_WIDTH, RESET


class TerminalProgress:
    """Progress callback that draws an upload progress bar on a terminal stream."""

    def __init__(self, filename: str, stream: Optional[TextIO] = None):
        """
        Initialize the progress display.

        Args:
            filename: Display name for the file
            stream: Output stream (defaults to stdout)
        """
        self.filename = filename
        self.stream = stream or sys.stdout
        self._finished = False

    def __call__(self, percent: float, message: str) -> None:
        """Redraw the bar for the given percentage and status message."""
        filled = int(PROGRESS_BAR_WIDTH * percent / 100)
        bar = '#' * filled + '-' * (PROGRESS_BAR_WIDTH - filled)
        self.stream.write(
            f"\r{self.filename} [{bar}] {GREEN}{round(percent)}%{RESET} {message}"
        )
        self.stream.flush()
        if percent >= 100 and message.startswith('Upload completed'):
            self.finish()

    def finish(self) -> None:
        """Finalize progress display with newline."""
        if self._finished:
            return
        self._finished = True
        self.stream.write('\n')
        self.stream.flush()


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"
