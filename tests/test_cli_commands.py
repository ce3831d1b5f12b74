"""Tests for CLI command handlers and parser."""

import pytest
from unittest.mock import Mock

from common.types import UploadSession, UploadState
from cli.commands import handle_config, handle_upload, upload_files
from cli.exceptions import CompletionFailedError, UploadExhaustedError
from cli.models import ConfigCommand, UploadCommand
from cli.parser import ParseError, parse_command
from cli.uploader import ChunkedUploader


def finished_session(name='sample.bin', size=25):
    session = UploadSession(upload_id='lq1x8kabc', file_name=name, file_size=size, chunk_size=10)
    session.state = UploadState.DONE
    return session


def test_handle_upload_success(sample_file):
    """Test upload command reports the finished session."""
    mock_uploader = Mock(spec=ChunkedUploader)
    mock_uploader.upload_file.return_value = finished_session()

    result = handle_upload(UploadCommand(file_list=(str(sample_file),)), uploader=mock_uploader)

    assert 'Uploaded: sample.bin' in result
    assert 'Chunks: 3' in result
    assert 'lq1x8kabc' in result
    mock_uploader.upload_file.assert_called_once_with(str(sample_file))


def test_handle_upload_file_not_found():
    """Test missing files are reported without calling the uploader."""
    mock_uploader = Mock(spec=ChunkedUploader)

    result = handle_upload(UploadCommand(file_list=('/nonexistent/file.bin',)), uploader=mock_uploader)

    assert 'File not found' in result
    mock_uploader.upload_file.assert_not_called()


def test_handle_upload_directory_rejected(tmp_path):
    """Test directories are not uploaded."""
    mock_uploader = Mock(spec=ChunkedUploader)

    result = handle_upload(UploadCommand(file_list=(str(tmp_path),)), uploader=mock_uploader)

    assert 'Not a file' in result


def test_upload_files_reports_exhausted_chunk(sample_file):
    """Test exhausted retries are reported with the failing chunk."""
    mock_uploader = Mock(spec=ChunkedUploader)
    mock_uploader.upload_file.side_effect = UploadExhaustedError(1, 3, 'lq1x8kabc')

    results, failures = upload_files([str(sample_file)], mock_uploader)

    assert failures == 1
    assert 'Upload failed' in results[0]
    assert 'after 3 attempts' in results[0]
    assert '(chunk 2)' in results[0]


def test_upload_files_continues_after_failure(sample_file, tmp_path):
    """Test a failed file does not stop the remaining files."""
    other = tmp_path / 'other.bin'
    other.write_bytes(b'abc')
    mock_uploader = Mock(spec=ChunkedUploader)
    mock_uploader.upload_file.side_effect = [
        CompletionFailedError(status_code=500),
        finished_session('other.bin', 3),
    ]

    results, failures = upload_files([str(sample_file), str(other)], mock_uploader)

    assert failures == 1
    assert 'Failed to complete upload' in results[0]
    assert 'Uploaded: other.bin' in results[1]
    assert mock_uploader.progress is None


def test_handle_config(temp_config):
    """Test config command summarizes settings."""
    temp_config.data['relay_url'] = 'http://relay.local'

    result = handle_config(ConfigCommand(), config=temp_config)

    assert 'Relay URL: http://relay.local' in result
    assert 'Chunk size: 5.00 MiB' in result
    assert 'Max attempts: 3' in result


def test_parse_upload_command():
    """Test upload parsing keeps quoted paths intact."""
    cmd = parse_command('upload a.bin "holiday video.mp4"')

    assert cmd == UploadCommand(file_list=('a.bin', 'holiday video.mp4'))


def test_parse_config_command():
    """Test config parsing."""
    assert parse_command('config') == ConfigCommand()


@pytest.mark.parametrize('line,message', [
    ('', 'Empty command'),
    ('upload', 'at least one file'),
    ('config extra', 'no arguments'),
    ('download x', 'Unknown command'),
    ('upload "unterminated', 'Invalid syntax'),
])
def test_parse_errors(line, message):
    """Test invalid input raises ParseError."""
    with pytest.raises(ParseError, match=message):
        parse_command(line)
