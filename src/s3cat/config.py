"""Run configuration for the streaming pipeline."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .addressing import S3_SCHEME, split_s3_name
from .errors import ConfigError, ObjectNameError

MAX_CONCURRENCY = 16
DEFAULT_CONCURRENCY = 4
DEFAULT_CHUNK_LINES = 1000


def effective_concurrency(
    requested: int, known_count: Optional[int] = None
) -> int:
    """Clamp the requested worker count to 1..16.

    When the number of names is known, never start more workers than names.
    """
    n = requested
    if known_count is not None:
        n = min(known_count, n)
    return min(MAX_CONCURRENCY, max(1, n))


class StreamConfig(BaseModel):
    """Settings for one pipeline run."""

    concurrency: int = Field(
        default=DEFAULT_CONCURRENCY, ge=1, le=MAX_CONCURRENCY
    )
    default_bucket: str = ""
    default_prefix: str = ""
    chunk_lines: int = Field(default=DEFAULT_CHUNK_LINES, ge=1)

    @property
    def pool_capacity(self) -> int:
        """Free-list size: two buffers per worker pair plus slack."""
        return 2 * self.concurrency + 2

    @classmethod
    def from_options(
        cls,
        concurrency: int = DEFAULT_CONCURRENCY,
        prefix: Optional[str] = None,
        known_count: Optional[int] = None,
        **kwargs,
    ) -> "StreamConfig":
        """Build a config from CLI option values.

        Raises:
            ConfigError: if the prefix is not an ``s3://bucket[/prefix]`` URL
                or any setting is out of range
        """
        bucket = ""
        key_prefix = ""
        if prefix:
            if not prefix.startswith(S3_SCHEME):
                raise ConfigError(
                    f"default prefix must be an s3:// URL: '{prefix}'"
                )
            try:
                bucket, key_prefix = split_s3_name(prefix)
            except ObjectNameError as e:
                raise ConfigError(str(e)) from e

        try:
            return cls(
                concurrency=effective_concurrency(concurrency, known_count),
                default_bucket=bucket,
                default_prefix=key_prefix,
                **kwargs,
            )
        except ValidationError as e:
            raise ConfigError(str(e)) from e
