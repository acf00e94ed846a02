"""Tests for object name sources."""

import io

from s3cat.names import ListNames, StreamNames, name_source


def test_list_names_in_order():
    source = ListNames(["b", "a", "c"])
    assert list(source) == ["b", "a", "c"]
    assert source.known_count == 3


def test_stream_names_strip_line_endings():
    source = StreamNames(io.StringIO("a.txt\nb.txt\r\n\nc.txt"))
    assert list(source) == ["a.txt", "b.txt", "", "c.txt"]
    assert source.known_count is None


def test_stream_names_empty():
    assert list(StreamNames(io.StringIO(""))) == []


def test_name_source_prefers_arguments():
    stdin = io.StringIO("ignored\n")
    assert isinstance(name_source(["x"], stdin), ListNames)
    assert isinstance(name_source([], stdin), StreamNames)
    assert isinstance(name_source((), stdin), StreamNames)
