"""Translation of backend failures into ``StorageError``.

The translators return the error instead of raising it; callers raise it
``from`` the original exception so the backend failure stays attached as the
cause.
"""

from __future__ import annotations

import logging

from minio.error import S3Error

from cloudstore.storage.contracts import ErrorKind, StorageError

logger = logging.getLogger(__name__)

NO_SUCH_BUCKET = "NoSuchBucket"
NO_SUCH_KEY = "NoSuchKey"
BUCKET_NOT_EMPTY = "BucketNotEmpty"
BUCKET_EXISTS_CODES = frozenset({"BucketAlreadyExists", "BucketAlreadyOwnedByYou"})


def translate_missing_bucket(op: str, resource: str | None) -> StorageError:
    return StorageError(
        ErrorKind.BUCKET_NOT_FOUND,
        f"Bucket not found during {op}: {resource}",
        op=op,
        resource=resource,
    )


def translate_s3_error(exc: S3Error, op: str, resource: str | None) -> StorageError:
    """Map an ``S3Error`` to the matching ``ErrorKind`` by its error code."""
    code = exc.code
    logger.debug("Backend error during %s on %s: code=%s", op, resource, code)

    if code == NO_SUCH_BUCKET:
        return translate_missing_bucket(op, resource)
    if code == NO_SUCH_KEY:
        return StorageError(
            ErrorKind.OBJECT_NOT_FOUND,
            f"Object not found during {op}: {resource}",
            op=op,
            resource=resource,
        )
    if code in BUCKET_EXISTS_CODES:
        return StorageError(
            ErrorKind.BUCKET_ALREADY_EXISTS,
            f"Bucket already exists: {resource}",
            op=op,
            resource=resource,
        )
    if code == BUCKET_NOT_EMPTY:
        return StorageError(
            ErrorKind.BUCKET_NOT_EMPTY,
            f"Bucket is not empty: {resource}",
            op=op,
            resource=resource,
        )
    return StorageError(
        ErrorKind.UNKNOWN,
        f"Failed to {op} for resource {resource}. S3Error: {exc.message}",
        op=op,
        resource=resource,
    )


def translate_unexpected_error(
    exc: BaseException, op: str, resource: str | None = None
) -> StorageError:
    """Map a failure that did not come from S3 itself (network, I/O, bugs)."""
    logger.debug("Unexpected error during %s: %r", op, exc)
    return StorageError(
        ErrorKind.UNKNOWN,
        f"Failed to {op}. Unknown error: {exc}",
        op=op,
        resource=resource,
    )


def translate_error(exc: BaseException, op: str, resource: str | None = None) -> StorageError:
    """Pick the translator matching the failure type."""
    if isinstance(exc, S3Error):
        return translate_s3_error(exc, op, resource)
    return translate_unexpected_error(exc, op, resource)


__all__ = [
    "translate_error",
    "translate_missing_bucket",
    "translate_s3_error",
    "translate_unexpected_error",
]
