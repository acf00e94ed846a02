"""Click context object shared by s3cat commands."""

from __future__ import annotations

from typing import Optional

import click

from .store import ObjectStore, S3Store


class CatContext:
    """Holds the object store for a CLI invocation.

    The store is created on first use so ``--help`` and config errors never
    touch boto3. Tests pass a ready-made store via ``obj=``.
    """

    def __init__(self, store: Optional[ObjectStore] = None):
        self._store = store

    @property
    def store(self) -> ObjectStore:
        if self._store is None:
            self._store = S3Store()
        return self._store


pass_context = click.make_pass_decorator(CatContext, ensure=True)
