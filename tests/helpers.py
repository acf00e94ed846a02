"""Shared helpers for building test objects."""

from __future__ import annotations


def numbered_lines(tag: str, count: int) -> str:
    """Return ``count`` distinct newline-terminated lines tagged with ``tag``."""
    return "".join(f"{tag}-{i:06d}\n" for i in range(count))


def lines_by_tag(output: bytes) -> dict[str, list[str]]:
    """Group output lines by the tag before the first '-'."""
    grouped: dict[str, list[str]] = {}
    for line in output.decode("utf-8").splitlines(keepends=True):
        tag = line.split("-", 1)[0]
        grouped.setdefault(tag, []).append(line)
    return grouped
