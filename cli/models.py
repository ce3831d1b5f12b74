"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadCommand:
    """Upload one or more files in chunks."""

    file_list: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ConfigCommand:
    """Show the active configuration."""

    command: Literal["config"] = "config"


CommandRequest = UploadCommand | ConfigCommand
