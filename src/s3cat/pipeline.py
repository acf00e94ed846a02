"""Concurrent fetch → scan → write pipeline.

Stages run as threads connected by bounded queues, each holding at most N
items, so a slow writer stalls the scanners and slow scanners stall the
fetchers::

    names ─▶ fetchers (N) ─▶ objects ─▶ scanners (N) ─▶ chunks ─▶ writer ─▶ stdout
    any stage ─▶ errors ─▶ error sink ─▶ stderr

Shutdown is driven by sentinels, one per worker, sent stage by stage: a
stage is only told to stop once everything upstream of it has exited, so no
work can arrive after its sentinel.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from queue import Queue
from typing import Any, BinaryIO, Optional

import click

from .config import StreamConfig
from .errors import WriteError
from .fetcher import fetch_object
from .pool import BufferPool, PoolStats
from .scanner import scan_object
from .store import ObjectStore
from .writer import terminate, write_fully

# End-of-stream marker; compared by identity
SENTINEL = object()


@dataclass
class PipelineResult:
    """Outcome of a pipeline run."""

    errors: int = 0
    objects: int = 0
    chunks: int = 0
    bytes_written: int = 0
    pool: PoolStats = field(default_factory=PoolStats)

    @property
    def ok(self) -> bool:
        return self.errors == 0


def echo_error(message: str) -> None:
    click.echo(message, err=True)


class Pipeline:
    """One run of the streaming pipeline.

    Args:
        store: Object store the fetchers download from
        config: Run settings; ``config.concurrency`` is used as-is
        out: Binary output stream (default: stdout)
        report: Called with each error message (default: echo to stderr)
    """

    def __init__(
        self,
        store: ObjectStore,
        config: Optional[StreamConfig] = None,
        out: Optional[BinaryIO] = None,
        report: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.config = config or StreamConfig()
        self.out = out if out is not None else click.get_binary_stream("stdout")
        self.report = report or echo_error

        n = self.config.concurrency
        self.pool = BufferPool(self.config.pool_capacity)
        self.names: Queue[Any] = Queue(maxsize=n)
        self.objects: Queue[Any] = Queue(maxsize=n)
        self.chunks: Queue[Any] = Queue(maxsize=n)
        self.errors: Queue[Any] = Queue(maxsize=n)

        self.failures = 0
        self._fetched = 0
        self._fetched_lock = threading.Lock()
        self._chunks_written = 0
        self._bytes_written = 0

        self._fetchers: list[threading.Thread] = []
        self._scanners: list[threading.Thread] = []
        self._writer: Optional[threading.Thread] = None
        self._error_sink: Optional[threading.Thread] = None
        self._started = False

    def run(self, names: Iterable[str]) -> PipelineResult:
        """Stream every object in ``names`` and wait for the output to drain.

        Empty names are skipped. Per-object failures are reported and counted
        in the result; they never stop the run.
        """
        if self._started:
            raise RuntimeError("pipeline has already run")
        self._start()
        try:
            for name in names:
                if name:
                    self.names.put(name)
        finally:
            self._shutdown()
        return self.result()

    def result(self) -> PipelineResult:
        return PipelineResult(
            errors=self.failures,
            objects=self._fetched,
            chunks=self._chunks_written,
            bytes_written=self._bytes_written,
            pool=self.pool.stats,
        )

    def _start(self) -> None:
        self._started = True
        n = self.config.concurrency
        self._error_sink = self._spawn(self._drain_errors, "s3cat-errors")
        self._writer = self._spawn(self._write_chunks, "s3cat-writer")
        self._scanners = [
            self._spawn(self._scan_objects, f"s3cat-scan-{i}") for i in range(n)
        ]
        self._fetchers = [
            self._spawn(self._fetch_names, f"s3cat-fetch-{i}") for i in range(n)
        ]

    def _shutdown(self) -> None:
        for _ in self._fetchers:
            self.names.put(SENTINEL)
        for t in self._fetchers:
            t.join()

        for _ in self._scanners:
            self.objects.put(SENTINEL)
        for t in self._scanners:
            t.join()

        # The writer can still publish errors while draining, so the error
        # sink is stopped after it.
        self.chunks.put(SENTINEL)
        self._writer.join()
        self.errors.put(SENTINEL)
        self._error_sink.join()

        self.pool.close()

    @staticmethod
    def _spawn(target: Callable[[], None], name: str) -> threading.Thread:
        t = threading.Thread(target=target, name=name, daemon=True)
        t.start()
        return t

    def _publish(self, err: BaseException) -> None:
        self.errors.put(err)

    def _fetch_names(self) -> None:
        cfg = self.config
        while True:
            name = self.names.get()
            if name is SENTINEL:
                return
            try:
                obj = fetch_object(
                    name,
                    self.store,
                    self.pool,
                    cfg.default_bucket,
                    cfg.default_prefix,
                )
            except Exception as e:
                self._publish(e)
                continue
            with self._fetched_lock:
                self._fetched += 1
            self.objects.put(obj)

    def _scan_objects(self) -> None:
        while True:
            obj = self.objects.get()
            if obj is SENTINEL:
                return
            try:
                scan_object(
                    obj, self.pool, self.chunks.put, self.config.chunk_lines
                )
            except Exception as e:
                self._publish(e)

    def _write_chunks(self) -> None:
        while True:
            chunk = self.chunks.get()
            if chunk is SENTINEL:
                break
            try:
                self._bytes_written += write_fully(self.out, terminate(chunk))
                self._chunks_written += 1
            except Exception as e:
                self._publish(e)
            finally:
                self.pool.put(chunk)

        try:
            self.out.flush()
        except OSError as e:
            self._publish(WriteError(f"flush failed: {e}"))

    def _drain_errors(self) -> None:
        while True:
            err = self.errors.get()
            if err is SENTINEL:
                return
            self.failures += 1
            try:
                self.report(str(err))
            except OSError:
                # stderr is gone; the count still decides the exit status
                continue
