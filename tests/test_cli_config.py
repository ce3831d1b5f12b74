"""Tests for CLI configuration module."""

import json
from cli.config import Config


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.chunkrelay' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['relay_url'] == Config.DEFAULT_CONFIG['relay_url']
    assert config.data['timeout'] == 30
    assert config.data['chunk_size'] == 5 * 1024 * 1024
    assert config.data['max_attempts'] == 3
    assert config.data['retry_base_delay'] == 1.0
    assert config.data['retry_backoff_multiplier'] == 2


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file merges with defaults."""
    config_path = tmp_path / '.chunkrelay' / 'config.json'
    config_path.parent.mkdir(parents=True)

    existing_data = {
        'relay_url': 'https://relay.example.com/',
        'chunk_size': 1024,
    }
    with open(config_path, 'w') as f:
        json.dump(existing_data, f)

    config = Config(config_path)

    assert config.get_relay_url() == 'https://relay.example.com'
    assert config.get_chunk_size() == 1024

    assert config.data['timeout'] == 30
    assert config.data['max_attempts'] == 3


def test_config_set_relay_url_persists(temp_config):
    """Test saving and retrieving the relay URL."""
    temp_config.set_relay_url('http://relay.local:9000')

    assert temp_config.get_relay_url() == 'http://relay.local:9000'

    with open(temp_config.config_path, 'r') as f:
        data = json.load(f)
    assert data['relay_url'] == 'http://relay.local:9000'


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.chunkrelay' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write('{ invalid json content')

    config = Config(config_path)
    assert config.data['max_attempts'] == 3
    assert config.get_chunk_size() == 5 * 1024 * 1024

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()


def test_config_get_timeout(temp_config):
    """Test timeout retrieval."""
    assert temp_config.get_timeout() == 30

    temp_config.data['timeout'] = 60
    assert temp_config.get_timeout() == 60


def test_config_get_retry_config(temp_config):
    """Test retry configuration retrieval."""
    retry_config = temp_config.get_retry_config()

    assert retry_config['max_attempts'] == 3
    assert retry_config['retry_base_delay'] == 1.0
    assert retry_config['retry_backoff_multiplier'] == 2

    temp_config.data['max_attempts'] = 5
    temp_config.data['retry_backoff_multiplier'] = 3

    retry_config = temp_config.get_retry_config()
    assert retry_config['max_attempts'] == 5
    assert retry_config['retry_backoff_multiplier'] == 3


def test_config_directory_created_if_missing(tmp_path):
    """Test that config directory is created if it doesn't exist."""
    config_path = tmp_path / 'nested' / 'deep' / '.chunkrelay' / 'config.json'

    assert not config_path.parent.exists()

    Config(config_path)
    assert config_path.parent.exists()
    assert config_path.exists()


def test_env_relay_url_overrides_stored_value(tmp_path, monkeypatch):
    """Test CHUNKRELAY_RELAY_URL wins over a relay URL already in the file."""
    config_path = tmp_path / '.chunkrelay' / 'config.json'
    Config(config_path)
    assert json.loads(config_path.read_text())['relay_url'] == 'http://localhost:8000'

    monkeypatch.setenv('CHUNKRELAY_RELAY_URL', 'http://override:9000/')
    config = Config(config_path)

    assert config.get_relay_url() == 'http://override:9000'


def test_env_relay_url_is_not_persisted(tmp_path, monkeypatch):
    """Test the environment override never lands in the config file."""
    config_path = tmp_path / '.chunkrelay' / 'config.json'
    monkeypatch.setenv('CHUNKRELAY_RELAY_URL', 'http://override:9000')

    config = Config(config_path)
    config.save()

    assert json.loads(config_path.read_text())['relay_url'] == 'http://localhost:8000'
