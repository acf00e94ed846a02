"""Output stage helpers: newline fix-up and short-write-safe writes."""

from __future__ import annotations

from typing import BinaryIO

from .errors import WriteError

NEWLINE = 0x0A


def terminate(chunk: bytearray) -> bytearray:
    """Append a newline to a non-empty chunk that lacks one, in place."""
    if chunk and chunk[-1] != NEWLINE:
        chunk.append(NEWLINE)
    return chunk


def write_fully(stream: BinaryIO, data: bytes | bytearray) -> int:
    """Write all of ``data``, reissuing the unwritten suffix on short writes.

    Raw streams may accept only part of a write (for instance when a signal
    interrupts it); buffered streams normally take everything at once.

    Returns:
        Number of bytes written

    Raises:
        WriteError: if the stream fails or stops making progress
    """
    total = len(data)
    written = 0
    with memoryview(data) as view:
        while written < total:
            try:
                n = stream.write(view[written:])
            except OSError as e:
                raise WriteError(
                    f"write failed after {written} of {total} bytes: {e}"
                ) from e
            if not n:
                raise WriteError(
                    f"short write: {written} of {total} bytes written"
                )
            written += n
    return written
