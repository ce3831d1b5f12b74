"""Shared pytest fixtures for all tests."""

import base64
import json

import httpx
import pytest
from cli.config import Config


class FakeRelay:
    """
    Scripted relay for httpx.MockTransport.

    Records every request and answers chunk uploads from a list of
    status codes per chunk index (200 once the list is exhausted).
    """

    def __init__(self, chunk_failures=None, complete_status=200):
        self.chunk_failures = {k: list(v) for k, v in (chunk_failures or {}).items()}
        self.complete_status = complete_status
        self.requests = []

    @property
    def chunk_requests(self):
        return [body for path, body in self.requests if path == '/upload-chunk']

    @property
    def complete_requests(self):
        return [body for path, body in self.requests if path == '/complete-upload']

    def chunk_sizes(self):
        return [len(base64.b64decode(body['chunk'])) for body in self.chunk_requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append((request.url.path, body))

        if request.url.path == '/upload-chunk':
            pending = self.chunk_failures.get(body['chunkIndex'])
            if pending:
                return httpx.Response(pending.pop(0), json={'error': 'Internal server error: boom'})
            return httpx.Response(200, json={
                'success': True,
                'chunkIndex': body['chunkIndex'],
                'message': f"Chunk {body['chunkIndex'] + 1} uploaded successfully"
            })

        if request.url.path == '/complete-upload':
            if self.complete_status != 200:
                return httpx.Response(self.complete_status, json={'error': 'Internal server error: boom'})
            return httpx.Response(200, json={
                'success': True,
                'message': 'File upload completed successfully!',
                'fileName': body['fileName']
            })

        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler), base_url='http://test')


@pytest.fixture(autouse=True)
def clear_relay_url_env(monkeypatch):
    """Keep a relay URL from the caller's environment out of config tests."""
    monkeypatch.delenv(Config.RELAY_URL_ENV, raising=False)


@pytest.fixture
def relay_factory():
    """Factory for scripted relays: relay_factory(chunk_failures={1: [500]}, complete_status=500)."""
    return FakeRelay


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .chunkrelay directory
    """
    config_dir = tmp_path / '.chunkrelay'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file spanning three 10-byte chunks.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to sample binary file (25 bytes)
    """
    file_path = tmp_path / 'sample.bin'
    file_path.write_bytes(bytes(range(25)))
    return file_path
