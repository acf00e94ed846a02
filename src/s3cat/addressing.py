"""Object name parsing.

Names take one of two forms:

    s3://bucket/key/path.txt     # absolute
    key/path.txt                 # relative to the default bucket and prefix

Examples:
    >>> split_s3_name("s3://logs/2024/01/app.log.gz")
    ('logs', '2024/01/app.log.gz')
    >>> split_s3_name("s3://logs")
    ('logs', '')
    >>> split_s3_name("2024/01/app.log")
    ('', '2024/01/app.log')
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MissingKeyError, ObjectNameError

S3_SCHEME = "s3://"


@dataclass(frozen=True)
class ObjectAddress:
    """Fully resolved location of an object."""

    bucket: str
    key: str

    def __str__(self) -> str:
        return f"{S3_SCHEME}{self.bucket}/{self.key}"


def split_s3_name(name: str) -> tuple[str, str]:
    """Split an object name into ``(bucket, key)``.

    Relative names return an empty bucket. A bucket-only URL returns an
    empty key; it is up to the caller to decide whether that is an error.

    Raises:
        ObjectNameError: if the name is empty or an s3 URL lacks a bucket
    """
    if not name:
        raise ObjectNameError("empty object name")

    if not name.startswith(S3_SCHEME):
        return "", name

    path = name[len(S3_SCHEME) :]
    if not path or path.startswith("/"):
        raise ObjectNameError(f"missing bucket in S3 URL: '{name}'")

    bucket, sep, key = path.partition("/")
    if not sep:
        return path, ""
    return bucket, key


def resolve_name(
    name: str, default_bucket: str = "", default_prefix: str = ""
) -> ObjectAddress:
    """Resolve a name against the run-wide default bucket and prefix.

    The prefix is joined to relative keys verbatim, so a directory-style
    prefix needs its trailing slash (``s3://bucket/logs/``).
    """
    bucket, key = split_s3_name(name)
    if not bucket:
        if not default_bucket:
            raise ObjectNameError(
                f"no default bucket for relative key '{name}'"
            )
        bucket = default_bucket
        key = default_prefix + key
    if not key:
        raise MissingKeyError(f"missing object key: '{name}'")
    return ObjectAddress(bucket=bucket, key=key)
