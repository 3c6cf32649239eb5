"""Storage interfaces and error types."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

# Keys of the metadata mapping returned by ObjectStorage.get_file_info.
CONTENT_LENGTH = "Content-Length"
LAST_MODIFIED = "Last-Modified"
CONTENT_TYPE = "Content-Type"
ETAG = "ETag"

ObjectMetadata = dict[str, str]


class ErrorKind(str, Enum):
    """Closed taxonomy of storage failures."""

    NULL_VALUE = "NullValue"
    EMPTY_VALUE = "EmptyValue"
    INVALID_FORMAT = "InvalidFormat"
    BUCKET_NOT_FOUND = "BucketNotFound"
    OBJECT_NOT_FOUND = "ObjectNotFound"
    BUCKET_ALREADY_EXISTS = "BucketAlreadyExists"
    BUCKET_NOT_EMPTY = "BucketNotEmpty"
    LOCAL_FILE_NOT_FOUND = "LocalFileNotFound"
    UNKNOWN = "Unknown"


_VALIDATION_KINDS = frozenset(
    {ErrorKind.NULL_VALUE, ErrorKind.EMPTY_VALUE, ErrorKind.INVALID_FORMAT}
)
_NOT_FOUND_KINDS = frozenset({ErrorKind.BUCKET_NOT_FOUND, ErrorKind.OBJECT_NOT_FOUND})
_CONFLICT_KINDS = frozenset({ErrorKind.BUCKET_ALREADY_EXISTS, ErrorKind.BUCKET_NOT_EMPTY})


class StorageError(Exception):
    """Single error type raised by the storage facade.

    The failure category lives in ``kind``; ``op`` and ``resource`` name the
    operation and the offending parameter or resource. Failures that come
    from the backend are chained, so the original exception is available as
    ``cause`` (``__cause__``).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        op: str | None = None,
        resource: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.op = op
        self.resource = resource
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"StorageError(kind={self.kind.value}, op={self.op!r}, "
            f"resource={self.resource!r}, message={self.message!r})"
        )

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    @property
    def is_validation_error(self) -> bool:
        return self.kind in _VALIDATION_KINDS

    @property
    def is_not_found(self) -> bool:
        return self.kind in _NOT_FOUND_KINDS

    @property
    def is_conflict(self) -> bool:
        return self.kind in _CONFLICT_KINDS


@runtime_checkable
class ObjectStorage(Protocol):
    """Contract for object storage implementations.

    Every method raises ``StorageError`` on failure.
    """

    # --- objects ---

    def list_files(self, bucket: str, prefix: str = "") -> list[str]:
        ...

    def file_exists(self, bucket: str, key: str) -> bool:
        ...

    def upload_file(self, local_path: str, bucket: str, destination_key: str) -> None:
        ...

    def download_file(self, bucket: str, source_key: str, local_destination_path: str) -> None:
        ...

    def delete_file(self, bucket: str, key: str) -> None:
        ...

    def copy_file(self, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> None:
        ...

    def move_file(self, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> None:
        ...

    def get_file_info(self, bucket: str, key: str) -> ObjectMetadata:
        ...

    # --- buckets ---

    def list_buckets(self) -> list[str]:
        ...

    def bucket_exists(self, bucket: str) -> bool:
        ...

    def create_bucket(self, bucket: str) -> None:
        ...

    def delete_bucket(self, bucket: str) -> None:
        ...


__all__ = [
    "CONTENT_LENGTH",
    "CONTENT_TYPE",
    "ETAG",
    "LAST_MODIFIED",
    "ErrorKind",
    "ObjectMetadata",
    "ObjectStorage",
    "StorageError",
]
