"""MinIO-backed implementation of the storage interfaces."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from minio import Minio
from minio.commonconfig import CopySource
from minio.error import S3Error

from cloudstore.storage.contracts import (
    CONTENT_LENGTH,
    CONTENT_TYPE,
    ETAG,
    LAST_MODIFIED,
    ErrorKind,
    ObjectMetadata,
    ObjectStorage,
    StorageError,
)
from cloudstore.storage.translation import (
    NO_SUCH_BUCKET,
    NO_SUCH_KEY,
    translate_error,
    translate_missing_bucket,
    translate_s3_error,
)
from cloudstore.storage.validation import ParamKind, run_validations

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _object_ref(bucket: str, key: str) -> str:
    return f"{bucket}/{key}"


class MinioStorage(ObjectStorage):
    """Object storage facade backed by the MinIO SDK.

    Every validated operation checks all of its parameters before the first
    call to the client. Backend failures are raised as ``StorageError`` with
    the original exception chained. The instance holds no state besides the
    client and does no locking or retrying of its own.
    """

    def __init__(self, client: Minio):
        self._client = client

    def _translate_head_lookup(
        self, exc: S3Error, op: str, bucket: str, resource: str
    ) -> StorageError:
        """Translate a failure from a call that starts with a HEAD on an object.

        HEAD responses have no body, so the client reports a missing bucket as
        NoSuchKey. The bucket is looked up before settling on OBJECT_NOT_FOUND.
        """
        if exc.code == NO_SUCH_KEY and not self.bucket_exists(bucket):
            return translate_missing_bucket(op, bucket)
        return translate_s3_error(exc, op, resource)

    # --------------
    # Object methods
    # --------------
    def list_files(self, bucket: str, prefix: str = "") -> list[str]:
        """Return the keys under ``prefix`` in the order the backend lists them.

        An empty prefix lists the whole bucket.
        """
        op = "list files"
        run_validations(bucket, [(prefix, ParamKind.PREFIX)], op=op)

        try:
            objects = self._client.list_objects(bucket_name=bucket, prefix=prefix, recursive=True)
            return [obj.object_name for obj in objects]
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc

    def file_exists(self, bucket: str, key: str) -> bool:
        """Return whether ``key`` exists; a missing object is not an error.

        The check is a HEAD request, which cannot tell a missing bucket from a
        missing key, so a missing bucket also gives False.
        """
        op = "check file existence"
        run_validations(bucket, [(key, ParamKind.KEY)], op=op)

        try:
            self._client.stat_object(bucket_name=bucket, object_name=key)
            return True
        except S3Error as exc:
            if exc.code == NO_SUCH_KEY:
                return False
            raise translate_s3_error(exc, op, _object_ref(bucket, key)) from exc
        except Exception as exc:
            raise translate_error(exc, op, _object_ref(bucket, key)) from exc

    def upload_file(self, local_path: str, bucket: str, destination_key: str) -> None:
        op = "upload file"
        run_validations(
            bucket,
            [(local_path, ParamKind.LOCAL_PATH), (destination_key, ParamKind.DESTINATION_KEY)],
            op=op,
        )

        if not Path(local_path).is_file():
            raise StorageError(
                ErrorKind.LOCAL_FILE_NOT_FOUND,
                f"File does not exist: {local_path}",
                op=op,
                resource=local_path,
            )

        content_type = mimetypes.guess_type(local_path)[0] or DEFAULT_CONTENT_TYPE
        try:
            self._client.fput_object(
                bucket_name=bucket,
                object_name=destination_key,
                file_path=local_path,
                content_type=content_type,
            )
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc
        logger.debug("Uploaded %s to %s", local_path, _object_ref(bucket, destination_key))

    def download_file(self, bucket: str, source_key: str, local_destination_path: str) -> None:
        op = "download file"
        run_validations(
            bucket,
            [
                (source_key, ParamKind.SOURCE_KEY),
                (local_destination_path, ParamKind.LOCAL_DESTINATION_PATH),
            ],
            op=op,
        )

        try:
            self._client.fget_object(
                bucket_name=bucket,
                object_name=source_key,
                file_path=local_destination_path,
            )
        except S3Error as exc:
            raise self._translate_head_lookup(exc, op, bucket, _object_ref(bucket, source_key)) from exc
        except Exception as exc:
            raise translate_error(exc, op, _object_ref(bucket, source_key)) from exc
        logger.debug("Downloaded %s to %s", _object_ref(bucket, source_key), local_destination_path)

    def delete_file(self, bucket: str, key: str) -> None:
        """Delete ``key``. Deleting an absent key succeeds."""
        op = "delete file"
        run_validations(bucket, [(key, ParamKind.KEY)], op=op)

        try:
            self._client.remove_object(bucket_name=bucket, object_name=key)
        except S3Error as exc:
            if exc.code == NO_SUCH_KEY:
                logger.debug("Delete of absent object %s ignored", _object_ref(bucket, key))
                return
            raise translate_s3_error(exc, op, bucket) from exc
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc

    def copy_file(self, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> None:
        """Server-side copy of one object.

        A missing source or destination bucket raises BUCKET_NOT_FOUND; a
        missing source object raises OBJECT_NOT_FOUND.
        """
        op = "copy file"
        run_validations(source_bucket, [(source_key, ParamKind.SOURCE_KEY)], op=op)
        run_validations(dest_bucket, [(dest_key, ParamKind.DESTINATION_KEY)], op=op)

        resource = f"{_object_ref(source_bucket, source_key)} -> {_object_ref(dest_bucket, dest_key)}"
        try:
            self._client.copy_object(
                bucket_name=dest_bucket,
                object_name=dest_key,
                source=CopySource(bucket_name=source_bucket, object_name=source_key),
            )
        except S3Error as exc:
            # the client stats the source before copying
            raise self._translate_head_lookup(exc, op, source_bucket, resource) from exc
        except Exception as exc:
            raise translate_error(exc, op, resource) from exc

    def move_file(self, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str) -> None:
        """Copy the object to its destination, then delete the source.

        The two steps are not atomic. If the copy fails nothing changes and
        the delete is never attempted. If the delete fails the destination
        already holds the copy, so the object exists in both places and the
        delete's error is raised. At least one copy always persists.
        """
        self.copy_file(source_bucket, source_key, dest_bucket, dest_key)
        try:
            self.delete_file(source_bucket, source_key)
        except StorageError:
            logger.warning(
                "Move left a duplicate: copied %s to %s but could not delete the source",
                _object_ref(source_bucket, source_key),
                _object_ref(dest_bucket, dest_key),
            )
            raise

    def get_file_info(self, bucket: str, key: str) -> ObjectMetadata:
        """Return Content-Length, Last-Modified, Content-Type and ETag of ``key``."""
        op = "get file info"
        run_validations(bucket, [(key, ParamKind.KEY)], op=op)

        try:
            stat = self._client.stat_object(bucket_name=bucket, object_name=key)
        except Exception as exc:
            raise translate_error(exc, op, _object_ref(bucket, key)) from exc

        last_modified = stat.last_modified.isoformat() if stat.last_modified else ""
        return {
            CONTENT_LENGTH: str(stat.size if stat.size is not None else 0),
            LAST_MODIFIED: last_modified,
            CONTENT_TYPE: stat.content_type or "",
            ETAG: stat.etag or "",
        }

    # --------------
    # Bucket methods
    # --------------
    def list_buckets(self) -> list[str]:
        op = "list buckets"
        try:
            return [b.name for b in self._client.list_buckets()]
        except Exception as exc:
            raise translate_error(exc, op) from exc

    def bucket_exists(self, bucket: str) -> bool:
        op = "check bucket existence"
        try:
            return bool(self._client.bucket_exists(bucket_name=bucket))
        except S3Error as exc:
            if exc.code == NO_SUCH_BUCKET:
                return False
            raise translate_s3_error(exc, op, bucket) from exc
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc

    def create_bucket(self, bucket: str) -> None:
        op = "create bucket"
        try:
            self._client.make_bucket(bucket_name=bucket)
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc
        logger.info("Created bucket %s", bucket)

    def delete_bucket(self, bucket: str) -> None:
        """Delete an empty bucket.

        A bucket that still holds objects raises BUCKET_NOT_EMPTY rather than
        UNKNOWN, so callers can empty it and retry.
        """
        op = "delete bucket"
        try:
            self._client.remove_bucket(bucket_name=bucket)
        except Exception as exc:
            raise translate_error(exc, op, bucket) from exc
        logger.info("Deleted bucket %s", bucket)


__all__ = ["MinioStorage"]
