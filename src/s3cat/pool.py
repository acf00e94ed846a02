"""Fixed-capacity free list of reusable byte buffers.

Neither ``get`` nor ``put`` ever blocks: a stage that is itself stalled on a
full downstream queue must still be able to recycle, so a miss on ``get``
means "allocate your own" and a full pool on ``put`` means "drop it".
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class PoolStats:
    """Counters for buffer traffic through a pool.

    Once every borrowed buffer has been released, ``hits + misses`` equals
    ``recycled + dropped``.
    """

    hits: int = 0
    misses: int = 0
    recycled: int = 0
    dropped: int = 0

    @property
    def acquired(self) -> int:
        return self.hits + self.misses

    @property
    def released(self) -> int:
        return self.recycled + self.dropped


class BufferPool:
    """Bounded ring of ``bytearray`` buffers shared by pipeline stages."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"pool capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._free: queue.Queue[bytearray] = queue.Queue(maxsize=capacity)
        self._closed = False
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._recycled = 0
        self._dropped = 0

    def get(self) -> bytearray | None:
        """Return an empty recycled buffer, or None if the pool has none."""
        if not self._closed:
            try:
                buf = self._free.get_nowait()
            except queue.Empty:
                pass
            else:
                with self._lock:
                    self._hits += 1
                return buf
        with self._lock:
            self._misses += 1
        return None

    def take(self) -> bytearray:
        """Return a recycled buffer, allocating a new one on a miss."""
        buf = self.get()
        if buf is None:
            buf = bytearray()
        return buf

    def put(self, buf: bytearray) -> None:
        """Reset ``buf`` to length zero and keep it if there is room."""
        if not self._closed:
            del buf[:]
            try:
                self._free.put_nowait(buf)
            except queue.Full:
                pass
            else:
                with self._lock:
                    self._recycled += 1
                return
        with self._lock:
            self._dropped += 1

    def close(self) -> None:
        """Release pooled buffers; later puts are dropped."""
        self._closed = True
        while True:
            try:
                self._free.get_nowait()
            except queue.Empty:
                break

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return self._free.qsize()

    @property
    def stats(self) -> PoolStats:
        with self._lock:
            return PoolStats(
                hits=self._hits,
                misses=self._misses,
                recycled=self._recycled,
                dropped=self._dropped,
            )
