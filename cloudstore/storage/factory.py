"""Factory for building storage instances from configuration."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from minio import Minio

from cloudstore.core.config import Settings
from cloudstore.storage.minio_impl import MinioStorage

logger = logging.getLogger(__name__)


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    Returns:
        Tuple of (host:port, secure_flag)
    """
    if "://" not in endpoint:
        endpoint = f"http://{endpoint}"
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_client(settings: Settings) -> Minio:
    """Build the MinIO client described by ``settings``."""
    host, secure = _normalize_endpoint(settings.S3_ENDPOINT)
    return Minio(
        host,
        access_key=settings.S3_ACCESS_KEY,
        secret_key=settings.S3_SECRET_KEY,
        secure=secure,
        region=settings.S3_REGION,
    )


def build_storage(settings: Settings | None = None) -> MinioStorage:
    """Build MinioStorage from settings.

    When ``settings`` is omitted they are read from the environment (and
    ``.env``) at call time:
        S3_ENDPOINT: Full URL to MinIO/S3 endpoint (e.g., http://localhost:9000)
        S3_ACCESS_KEY: Access key for authentication
        S3_SECRET_KEY: Secret key for authentication
        S3_REGION: Optional region name
    """
    settings = settings or Settings()
    client = build_client(settings)
    logger.debug("Built storage client for %s", settings.S3_ENDPOINT)
    return MinioStorage(client)


__all__ = ["build_client", "build_storage"]
