"""Input validation for storage operations.

Checks run before any backend call, so a malformed request never reaches the
network. Bucket names follow the S3 naming rules; the remaining string
parameters are checked by the role they play in the call (``ParamKind``).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, assert_never

from cloudstore.storage.contracts import ErrorKind, StorageError

# S3 bucket naming rules:
#   - 3-63 characters
#   - lowercase letters, digits, dots and hyphens
#   - begins and ends with a letter or digit
#   - not formatted as an IP address (e.g. 192.168.5.4)
BUCKET_NAME_RE = re.compile(
    r"^(?=.{3,63}$)(?!(\d+\.){3}\d+$)[a-z0-9](-?[a-z0-9])*(\.[a-z0-9](-?[a-z0-9])*)*$"
)


class ParamKind(str, Enum):
    """Role of a string parameter in a storage call."""

    PREFIX = "prefix"
    KEY = "key"
    LOCAL_PATH = "localPath"
    DESTINATION_KEY = "destinationKey"
    SOURCE_KEY = "sourceKey"
    LOCAL_DESTINATION_PATH = "localDestinationPath"

    @property
    def allows_empty(self) -> bool:
        """Whether the empty string is a meaningful value for this role.

        Only a prefix may be empty: it means "no filter".
        """
        match self:
            case ParamKind.PREFIX:
                return True
            case (
                ParamKind.KEY
                | ParamKind.LOCAL_PATH
                | ParamKind.DESTINATION_KEY
                | ParamKind.SOURCE_KEY
                | ParamKind.LOCAL_DESTINATION_PATH
            ):
                return False
            case _:
                assert_never(self)

    @property
    def label(self) -> str:
        match self:
            case ParamKind.PREFIX:
                return "Prefix"
            case ParamKind.KEY:
                return "Key (path)"
            case ParamKind.LOCAL_PATH:
                return "Local path"
            case ParamKind.DESTINATION_KEY:
                return "Destination key"
            case ParamKind.SOURCE_KEY:
                return "Source key"
            case ParamKind.LOCAL_DESTINATION_PATH:
                return "Local destination path"
            case _:
                assert_never(self)


def validate_bucket_name(name: str | None, *, op: str | None = None) -> None:
    """Validate a bucket name against the S3 naming rules.

    Checks run in a fixed order (None, then empty, then format) so callers can
    tell a missing name from a malformed one.

    Raises:
        StorageError: NULL_VALUE, EMPTY_VALUE or INVALID_FORMAT.
    """
    if name is None:
        raise StorageError(
            ErrorKind.NULL_VALUE, "Bucket name cannot be null!", op=op, resource="bucket"
        )
    if not isinstance(name, str):
        raise StorageError(
            ErrorKind.INVALID_FORMAT,
            f"Bucket name must be a string, got {type(name).__name__}",
            op=op,
            resource="bucket",
        )
    if name == "":
        raise StorageError(
            ErrorKind.EMPTY_VALUE, "Bucket name cannot be empty!", op=op, resource="bucket"
        )
    if not BUCKET_NAME_RE.fullmatch(name):
        raise StorageError(
            ErrorKind.INVALID_FORMAT,
            f"Invalid bucket name: {name}. It must follow S3 naming rules.",
            op=op,
            resource="bucket",
        )


def validate_param(value: str | None, kind: ParamKind, *, op: str | None = None) -> None:
    """Validate a string parameter according to its role.

    Raises:
        StorageError: NULL_VALUE when ``value`` is None, EMPTY_VALUE when it is
            empty and the kind does not allow that, INVALID_FORMAT when it is
            not a string.
    """
    if value is None:
        raise StorageError(
            ErrorKind.NULL_VALUE,
            f"{kind.label} cannot be a null value!",
            op=op,
            resource=kind.value,
        )
    if not isinstance(value, str):
        raise StorageError(
            ErrorKind.INVALID_FORMAT,
            f"{kind.label} must be a string, got {type(value).__name__}",
            op=op,
            resource=kind.value,
        )
    if value == "" and not kind.allows_empty:
        raise StorageError(
            ErrorKind.EMPTY_VALUE,
            f"{kind.label} cannot be empty!",
            op=op,
            resource=kind.value,
        )


def run_validations(
    bucket: str | None,
    params: Iterable[tuple[str | None, ParamKind]] = (),
    *,
    op: str | None = None,
) -> None:
    """Validate the bucket name, then every ``(value, kind)`` pair in order."""
    validate_bucket_name(bucket, op=op)
    for value, kind in params:
        validate_param(value, kind, op=op)


__all__ = [
    "BUCKET_NAME_RE",
    "ParamKind",
    "run_validations",
    "validate_bucket_name",
    "validate_param",
]
