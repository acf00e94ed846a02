"""Blob-store access.

The pipeline only needs one operation from a store: download an object into
a caller-supplied sink and report how many bytes were written. ``S3Store``
implements it with boto3's managed transfer, which may write ranges out of
order, hence the seekable ``WriteAtBuffer`` sink.

Credentials, region and endpoint come from the usual AWS environment
(``AWS_PROFILE``, ``AWS_DEFAULT_REGION``, ``AWS_ENDPOINT_URL``...).
"""

from __future__ import annotations

import io
import threading
from typing import Any, Optional, Protocol

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.config import Config as BotoConfig

from .addressing import ObjectAddress


class ObjectStore(Protocol):
    """Anything that can fill a sink with an object's bytes."""

    def download(self, address: ObjectAddress, sink: "WriteAtBuffer") -> int:
        """Write the object into ``sink`` and return the byte count."""
        ...


class WriteAtBuffer(io.RawIOBase):
    """Seekable, write-only file object over a ``bytearray``.

    Writes past the end grow the buffer (zero-filling any gap). Concurrent
    writers are serialised.
    """

    def __init__(self, buf: Optional[bytearray] = None):
        super().__init__()
        self.buf = buf if buf is not None else bytearray()
        self._pos = 0
        self._lock = threading.Lock()

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readable(self) -> bool:
        return False

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = len(self.buf) + offset
        else:
            raise ValueError(f"invalid whence: {whence}")
        if pos < 0:
            raise ValueError(f"negative seek position {pos}")
        self._pos = pos
        return pos

    def write(self, data: Any) -> int:
        return self.write_at(data, self._pos, advance=True)

    def write_at(self, data: Any, offset: int, advance: bool = False) -> int:
        """Write ``data`` at ``offset`` without disturbing other writers."""
        n = len(data)
        with self._lock:
            end = offset + n
            if offset > len(self.buf):
                self.buf.extend(bytes(offset - len(self.buf)))
            self.buf[offset:end] = data
            if advance:
                self._pos = end
        return n

    def __len__(self) -> int:
        return len(self.buf)


class S3Store:
    """Object store backed by a shared boto3 S3 client.

    boto3 clients are thread-safe, so one instance serves every fetcher.
    """

    def __init__(
        self,
        client: Any = None,
        transfer_config: Optional[TransferConfig] = None,
        max_pool_connections: int = 32,
    ):
        self._client = client
        self._client_lock = threading.Lock()
        self.max_pool_connections = max_pool_connections
        self.transfer_config = transfer_config or TransferConfig(
            use_threads=False
        )

    @property
    def client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                self._client = boto3.client(
                    "s3",
                    config=BotoConfig(
                        max_pool_connections=self.max_pool_connections
                    ),
                )
            return self._client

    def download(self, address: ObjectAddress, sink: WriteAtBuffer) -> int:
        start = len(sink)
        self.client.download_fileobj(
            Bucket=address.bucket,
            Key=address.key,
            Fileobj=sink,
            Config=self.transfer_config,
        )
        return len(sink) - start
