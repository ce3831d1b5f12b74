"""Configuration management for the ChunkRelay CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path

from common.constants import CHUNK_SIZE_BYTES


class Config:
    """Manages CLI configuration stored in JSON file."""

    RELAY_URL_ENV = "CHUNKRELAY_RELAY_URL"

    DEFAULT_CONFIG = {
        "relay_url": "http://localhost:8000",
        "timeout": 30,
        "chunk_size": CHUNK_SIZE_BYTES,
        "max_attempts": 3,
        "retry_base_delay": 1.0,
        "retry_backoff_multiplier": 2,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.chunkrelay/config.json)
        """
        self.config_path = config_path
        self.data = self._load()
        self.relay_url_override = os.environ.get(self.RELAY_URL_ENV) or None

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.chunkrelay' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError):
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError:
                    pass
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError:
                pass
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError:
            pass

    def get_relay_url(self) -> str:
        """
        Get relay base URL.
        CHUNKRELAY_RELAY_URL, when set, wins over the stored value and is never saved.

        Returns:
            Base URL string without trailing slash (e.g., "http://localhost:8000")
        """
        url = self.relay_url_override or self.data.get('relay_url', 'http://localhost:8000')
        return str(url).rstrip('/')

    def set_relay_url(self, url: str) -> None:
        """
        Set relay base URL and save to file.

        Args:
            url: Relay base URL
        """
        self.data['relay_url'] = url
        self.save()

    def get_timeout(self) -> float:
        """
        Get per-request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 30)

    def get_chunk_size(self) -> int:
        """
        Get chunk size in bytes.

        Returns:
            Chunk size (5 MiB unless overridden)
        """
        return int(self.data.get('chunk_size', CHUNK_SIZE_BYTES))

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_attempts', 'retry_base_delay' and 'retry_backoff_multiplier'
        """
        return {
            'max_attempts': self.data.get('max_attempts', 3),
            'retry_base_delay': self.data.get('retry_base_delay', 1.0),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }
