import logging
import os
import re
import sys
from typing import Optional


MAX_PAYLOAD_PREVIEW = 32


class ChunkPayloadFilter(logging.Filter):
    """Filter to shorten base64 chunk payloads in log records."""

    PATTERN = re.compile(
        r'(["\']?chunk["\']?\s*[:=]\s*["\']?)([A-Za-z0-9+/=]{%d,})' % (MAX_PAYLOAD_PREVIEW + 1)
    )

    def filter(self, record: logging.LogRecord) -> bool:
        """Truncate chunk payloads in the log message."""
        if isinstance(record.msg, str):
            record.msg = self._truncate(record.msg)

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._mask_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._mask_value(arg) for arg in record.args)

        return True

    def _truncate(self, text: str) -> str:
        return self.PATTERN.sub(
            lambda m: f"{m.group(1)}{m.group(2)[:MAX_PAYLOAD_PREVIEW]}...<{len(m.group(2))} chars>",
            text
        )

    def _mask_value(self, value):
        """Truncate payloads inside string arguments."""
        if isinstance(value, str):
            return self._truncate(value)
        return value


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        component_name: Name of the component (e.g., 'cli', 'relay')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler.setFormatter(formatter)
    handler.addFilter(ChunkPayloadFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
