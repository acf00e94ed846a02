"""Pytest configuration and shared fixtures."""

import gzip
import threading

import pytest
from click.testing import CliRunner

from s3cat.cli import cli
from s3cat.context import CatContext


class MemoryStore:
    """In-memory object store keyed by (bucket, key).

    Records every requested address so tests can check name resolution.
    """

    def __init__(self):
        self.objects = {}
        self.requests = []
        self._lock = threading.Lock()

    def add(self, bucket, key, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.objects[(bucket, key)] = data

    def add_gzip(self, bucket, key, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.objects[(bucket, key)] = gzip.compress(data)

    def download(self, address, sink):
        with self._lock:
            self.requests.append(address)
        try:
            data = self.objects[(address.bucket, address.key)]
        except KeyError:
            raise FileNotFoundError(f"no such object: {address}") from None
        return sink.write(data)


@pytest.fixture
def store():
    """Provide an empty in-memory object store."""
    return MemoryStore()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner, store):
    """Invoke the CLI against the in-memory store.

    Usage:
        result = invoke(["-c", "1", "s3://bucket/a.txt"])
        result = invoke(["-p", "s3://bucket/"], input_data="a.txt\\n")

    stdout and stderr are kept apart: use ``result.stdout_bytes`` for the
    streamed lines and ``result.stderr`` for error reports.
    """

    def _invoke(args, input_data=None, env=None):
        return cli_runner.invoke(
            cli, args, input=input_data, env=env, obj=CatContext(store)
        )

    return _invoke

