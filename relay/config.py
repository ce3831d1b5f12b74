"""Configuration settings for the relay server."""

import os


RELAY_HOST = os.environ.get("RELAY_HOST", "0.0.0.0")

RELAY_PORT = int(os.environ.get("RELAY_PORT", "8000"))

RELAY_UPSTREAM_URL = os.environ.get("RELAY_UPSTREAM_URL", "http://localhost:3000").rstrip("/")

RELAY_UPSTREAM_TIMEOUT = float(os.environ.get("RELAY_UPSTREAM_TIMEOUT", "60"))
