"""Shared storage dependency for scripts and applications."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cloudstore.storage.minio_impl import MinioStorage

_storage: "MinioStorage | None" = None


def get_storage() -> "MinioStorage":
    """Get or lazily initialize the storage singleton.

    Built from the shared settings on first use, so importing this module
    never touches MinIO.
    """
    global _storage
    if _storage is None:
        from cloudstore.core.config import settings
        from cloudstore.storage.factory import build_storage

        _storage = build_storage(settings)
    return _storage


def reset_storage() -> None:
    """Drop the cached instance so the next call rebuilds it from settings."""
    global _storage
    _storage = None


__all__ = ["get_storage", "reset_storage"]
