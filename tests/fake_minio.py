"""Stand-ins for the MinIO backend used by facade tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from hashlib import md5
from pathlib import Path
from types import SimpleNamespace
from urllib.parse import urlsplit

from minio.error import S3Error
from urllib3 import HTTPResponse, PoolManager


def make_s3_error(
    code: str,
    message: str = "backend says no",
    bucket: str | None = None,
    key: str | None = None,
) -> S3Error:
    """Build a real minio S3Error carrying ``code``."""
    return S3Error(
        code=code,
        message=message,
        resource=f"/{bucket or ''}/{key or ''}",
        request_id="request",
        host_id="host",
        response=None,
        bucket_name=bucket,
        object_name=key,
    )


@dataclass
class FakeMinioClient:
    """Keeps buckets and objects in dicts; records every call by name.

    ``fail_on`` maps a method name to an exception raised on its next call.
    """

    buckets: dict[str, dict[str, bytes]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail_on: dict[str, Exception] = field(default_factory=dict)

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        exc = self.fail_on.pop(method, None)
        if exc is not None:
            raise exc

    def _bucket(self, bucket_name: str) -> dict[str, bytes]:
        if bucket_name not in self.buckets:
            raise make_s3_error("NoSuchBucket", "The specified bucket does not exist", bucket_name)
        return self.buckets[bucket_name]

    def _object(self, bucket_name: str, object_name: str) -> bytes:
        # HEAD-backed lookup: the SDK reports a missing bucket as NoSuchKey here
        objects = self.buckets.get(bucket_name, {})
        if object_name not in objects:
            raise make_s3_error("NoSuchKey", "The specified key does not exist", bucket_name, object_name)
        return objects[object_name]

    # buckets

    def bucket_exists(self, bucket_name: str) -> bool:
        self._enter("bucket_exists")
        return bucket_name in self.buckets

    def make_bucket(self, bucket_name: str) -> None:
        self._enter("make_bucket")
        if bucket_name in self.buckets:
            raise make_s3_error("BucketAlreadyOwnedByYou", "Bucket already owned by you", bucket_name)
        self.buckets[bucket_name] = {}

    def remove_bucket(self, bucket_name: str) -> None:
        self._enter("remove_bucket")
        if self._bucket(bucket_name):
            raise make_s3_error("BucketNotEmpty", "The bucket you tried to delete is not empty", bucket_name)
        del self.buckets[bucket_name]

    def list_buckets(self):
        self._enter("list_buckets")
        return [SimpleNamespace(name=name) for name in self.buckets]

    # objects

    def list_objects(self, bucket_name: str, prefix: str | None = None, recursive: bool = False):
        self._enter("list_objects")
        objects = self._bucket(bucket_name)
        return iter(
            SimpleNamespace(object_name=key)
            for key in objects
            if key.startswith(prefix or "")
        )

    def stat_object(self, bucket_name: str, object_name: str):
        self._enter("stat_object")
        data = self._object(bucket_name, object_name)
        return SimpleNamespace(
            size=len(data),
            last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
            content_type="application/octet-stream",
            etag=md5(data).hexdigest(),
        )

    def fput_object(self, bucket_name: str, object_name: str, file_path: str, content_type: str = "") -> None:
        self._enter("fput_object")
        self._bucket(bucket_name)[object_name] = Path(file_path).read_bytes()

    def fget_object(self, bucket_name: str, object_name: str, file_path: str) -> None:
        self._enter("fget_object")
        data = self._object(bucket_name, object_name)
        Path(file_path).write_bytes(data)

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        self._enter("remove_object")
        self._bucket(bucket_name).pop(object_name, None)

    def copy_object(self, bucket_name: str, object_name: str, source) -> None:
        self._enter("copy_object")
        data = self._object(source.bucket_name, source.object_name)
        self._bucket(bucket_name)[object_name] = data


ERROR_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    "<Error><Code>{code}</Code><Message>{message}</Message>"
    "<BucketName>{bucket}</BucketName><Resource>/{path}</Resource>"
    "<RequestId>request</RequestId><HostId>host</HostId></Error>"
)


class StubS3Pool(PoolManager):
    """HTTP pool for a real ``Minio`` client, answering like a server holding ``buckets``.

    Buckets hold no objects. HEAD requests get an empty body, as S3 sends them;
    other misses get an XML error document.
    """

    def __init__(self, buckets=()):
        super().__init__()
        self.buckets = set(buckets)
        self.methods: list[str] = []

    def urlopen(self, method, url, redirect=True, **kw):
        self.methods.append(method)
        path = urlsplit(url).path.lstrip("/")
        bucket, _, key = path.partition("/")
        if bucket in self.buckets and not key:
            return HTTPResponse(body=b"", status=200, preload_content=False)
        if method == "HEAD":
            return HTTPResponse(body=b"", status=404, preload_content=False)
        if bucket in self.buckets:
            code, message = "NoSuchKey", "The specified key does not exist."
        else:
            code, message = "NoSuchBucket", "The specified bucket does not exist"
        body = ERROR_XML.format(code=code, message=message, bucket=bucket, path=path)
        return HTTPResponse(
            body=body.encode(),
            status=404,
            headers={"Content-Type": "application/xml"},
            preload_content=False,
        )


__all__ = ["FakeMinioClient", "StubS3Pool", "make_s3_error"]
