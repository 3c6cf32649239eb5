"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from cloudstore.storage.minio_impl import MinioStorage
from fake_minio import FakeMinioClient, make_s3_error


@pytest.fixture
def s3_error():
    """Factory fixture for S3Error instances."""
    return make_s3_error


@pytest.fixture
def fake_client():
    """In-memory MinIO client with one empty bucket."""
    return FakeMinioClient(buckets={"my-bucket": {}})


@pytest.fixture
def mock_client():
    """Create a mock MinIO client."""
    return MagicMock()


@pytest.fixture
def storage(mock_client):
    """MinioStorage wired to the mock client."""
    return MinioStorage(mock_client)


@pytest.fixture
def stat_result():
    """Object stat as returned by Minio.stat_object."""
    return SimpleNamespace(
        size=1024,
        last_modified=datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc),
        content_type="text/plain",
        etag="9b2cf535f27731c974343645a3985328",
    )


@pytest.fixture
def local_file(tmp_path):
    """A small file on disk to upload."""
    path = tmp_path / "hello.txt"
    path.write_text("hello")
    return path
