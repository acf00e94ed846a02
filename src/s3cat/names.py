"""Sources of object names: a fixed argument list or a line stream."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Optional, TextIO


class NameSource:
    """Iterable of object names.

    ``known_count`` is the number of names when it is known up front, which
    lets the pipeline avoid starting more workers than there is work for.
    """

    known_count: Optional[int] = None

    def __iter__(self) -> Iterator[str]:
        raise NotImplementedError


class ListNames(NameSource):
    """Names given on the command line, yielded in order."""

    def __init__(self, names: Sequence[str]):
        self.names = list(names)
        self.known_count = len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)


class StreamNames(NameSource):
    """One name per line from a text stream, read lazily until EOF."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def __iter__(self) -> Iterator[str]:
        for line in self.stream:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def name_source(names: Sequence[str], stream: TextIO) -> NameSource:
    """Use ``names`` if any were given, otherwise read ``stream``."""
    if names:
        return ListNames(names)
    return StreamNames(stream)
