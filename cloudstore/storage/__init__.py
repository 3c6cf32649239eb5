"""Storage package: object storage facade, validation and error translation."""

from cloudstore.storage.contracts import ErrorKind, ObjectMetadata, ObjectStorage, StorageError
from cloudstore.storage.minio_impl import MinioStorage
from cloudstore.storage.validation import ParamKind, validate_bucket_name, validate_param

__all__ = [
    "ErrorKind",
    "MinioStorage",
    "ObjectMetadata",
    "ObjectStorage",
    "ParamKind",
    "StorageError",
    "validate_bucket_name",
    "validate_param",
]
