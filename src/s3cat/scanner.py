"""Scan stage: decompress an object and cut it into line chunks.

Compression is sniffed rather than trusted from the name: an object is
treated as gzip only when its name has *some* extension and its bytes start
with the gzip magic. Names without an extension in the last path segment are
always read as plain text, even if the magic matches.
"""

from __future__ import annotations

import gzip
import io
import zlib
from collections.abc import Callable, Iterator
from typing import BinaryIO, Optional

from .config import DEFAULT_CHUNK_LINES
from .errors import DecodeError, ScanError
from .fetcher import Object
from .pool import BufferPool

GZIP_MAGIC = b"\x1f\x8b"
GZIP_HEADER_SIZE = 10

# Errors a gzip stream can raise once decoding is under way
DECODE_ERRORS = (OSError, EOFError, zlib.error)


def has_any_extension(name: str) -> bool:
    """True if the last '.' in ``name`` comes after the last '/'."""
    return name.rfind(".") > name.rfind("/")


def has_gzip_magic(buf: bytes | bytearray) -> bool:
    return len(buf) >= GZIP_HEADER_SIZE and buf[:2] == GZIP_MAGIC


def is_gzipped(name: str, buf: bytes | bytearray) -> bool:
    return has_any_extension(name) and has_gzip_magic(buf)


def buffer_lines(buf: bytes | bytearray) -> Iterator[bytes | bytearray]:
    """Yield the lines of an in-memory buffer, each with its newline.

    A trailing fragment without a newline is yielded as the last line.
    """
    start = 0
    size = len(buf)
    while start < size:
        end = buf.find(b"\n", start)
        end = size if end < 0 else end + 1
        yield buf[start:end]
        start = end


def split_lines(reader: BinaryIO) -> Iterator[bytes]:
    """Yield the lines of a binary stream, each with its newline."""
    for line in reader:
        yield line


def open_decoder(obj: Object) -> Optional[gzip.GzipFile]:
    """Return a gzip decoder for compressed objects, None for plain ones.

    The header is read eagerly so a malformed object fails here rather than
    part-way through scanning.

    Raises:
        DecodeError: if the object looks compressed but cannot be opened
    """
    if not is_gzipped(obj.name, obj.buf):
        return None
    try:
        decoder = gzip.GzipFile(fileobj=io.BytesIO(obj.buf), mode="rb")
        decoder.peek(1)
    except DECODE_ERRORS as e:
        raise DecodeError(obj.name, e) from e
    return decoder


def scan_object(
    obj: Object,
    pool: BufferPool,
    emit: Callable[[bytearray], None],
    chunk_lines: int = DEFAULT_CHUNK_LINES,
) -> int:
    """Split ``obj`` into chunks of ``chunk_lines`` lines and ``emit`` them.

    Every emitted chunk is a pooled buffer whose ownership passes to
    ``emit``. The object's own buffer is always returned to the pool.

    Returns:
        Number of chunks emitted

    Raises:
        DecodeError: if the decoder could not be opened (nothing emitted)
        ScanError: if decoding failed part-way; chunks already emitted stand,
            the pending partial chunk is discarded
    """
    try:
        decoder = open_decoder(obj)
    except DecodeError:
        pool.put(obj.buf)
        raise

    if decoder is not None:
        lines = split_lines(decoder)
    else:
        lines = buffer_lines(obj.buf)
    out = pool.take()
    count = 0
    emitted = 0
    try:
        for line in lines:
            out += line
            count += 1
            if count % chunk_lines == 0:
                emit(out)
                emitted += 1
                out = pool.take()
    except DECODE_ERRORS as e:
        pool.put(out)
        raise ScanError(obj.name, e) from e
    finally:
        if decoder is not None:
            decoder.close()
        pool.put(obj.buf)

    if count % chunk_lines:
        emit(out)
        emitted += 1
    else:
        pool.put(out)
    return emitted
