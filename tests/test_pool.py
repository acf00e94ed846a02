"""Tests for the buffer free list."""

import pytest

from s3cat.pool import BufferPool


def test_get_from_empty_pool_returns_none():
    pool = BufferPool(2)
    assert pool.get() is None
    assert pool.stats.misses == 1


def test_put_then_get_returns_same_buffer_emptied():
    pool = BufferPool(2)
    buf = bytearray(b"payload")
    pool.put(buf)

    got = pool.get()
    assert got is buf
    assert len(got) == 0
    assert pool.stats.hits == 1
    assert pool.stats.recycled == 1


def test_take_allocates_on_miss():
    pool = BufferPool(1)
    buf = pool.take()
    assert isinstance(buf, bytearray)
    assert len(buf) == 0
    assert pool.stats.misses == 1


def test_put_beyond_capacity_drops():
    pool = BufferPool(2)
    for _ in range(3):
        pool.put(bytearray(b"x"))

    assert len(pool) == 2
    assert pool.stats.recycled == 2
    assert pool.stats.dropped == 1


def test_put_after_close_is_dropped_silently():
    pool = BufferPool(2)
    pool.put(bytearray())
    pool.close()

    pool.put(bytearray(b"late"))
    assert pool.closed
    assert len(pool) == 0
    assert pool.get() is None
    assert pool.stats.dropped == 1


def test_stats_balance_after_all_buffers_returned():
    pool = BufferPool(3)
    held = [pool.take() for _ in range(5)]
    for buf in held:
        pool.put(buf)
    held = [pool.take() for _ in range(4)]
    for buf in held:
        pool.put(buf)

    stats = pool.stats
    assert stats.acquired == 9
    assert stats.acquired == stats.released


def test_invalid_capacity():
    with pytest.raises(ValueError):
        BufferPool(0)
