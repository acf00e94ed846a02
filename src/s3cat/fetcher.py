"""Fetch stage: turn an object name into a pooled buffer of its bytes."""

from __future__ import annotations

from dataclasses import dataclass

from .addressing import resolve_name
from .errors import FetchError
from .pool import BufferPool
from .store import ObjectStore, WriteAtBuffer


@dataclass
class Object:
    """A downloaded object.

    ``buf`` is borrowed from the pool; whichever stage holds the Object owns
    it and must either pass it on or return it.
    """

    name: str
    buf: bytearray


def fetch_object(
    name: str,
    store: ObjectStore,
    pool: BufferPool,
    default_bucket: str = "",
    default_prefix: str = "",
) -> Object:
    """Download ``name`` into a buffer taken from ``pool``.

    Raises:
        ObjectNameError: if the name cannot be parsed or has no bucket
        MissingKeyError: if the name has a bucket but no key
        FetchError: if the download fails; the buffer is already recycled
    """
    address = resolve_name(name, default_bucket, default_prefix)

    sink = WriteAtBuffer(pool.take())
    try:
        n = store.download(address, sink)
    except Exception as e:
        pool.put(sink.buf)
        raise FetchError(name, e) from e

    buf = sink.buf
    del buf[n:]
    return Object(name=name, buf=buf)
