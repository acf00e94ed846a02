"""Error types published on the pipeline error channel.

Each error's ``str()`` is the line printed to stderr, so messages carry the
object name where one is known.
"""


class S3CatError(Exception):
    """Base class for all s3cat errors."""

    pass


class ConfigError(S3CatError, ValueError):
    """Invalid command-line configuration; aborts before the pipeline starts."""

    pass


class ObjectNameError(S3CatError, ValueError):
    """Object name could not be split into bucket and key."""

    pass


class MissingKeyError(S3CatError):
    """Object name resolved to a bucket with no key."""

    pass


class FetchError(S3CatError):
    """Download of an object failed."""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


class DecodeError(S3CatError):
    """Compressed object could not be opened."""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


class ScanError(S3CatError):
    """Object failed part-way through decoding."""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


class WriteError(S3CatError):
    """A chunk could not be written to the output stream."""

    pass


__all__ = [
    "ConfigError",
    "DecodeError",
    "FetchError",
    "MissingKeyError",
    "ObjectNameError",
    "S3CatError",
    "ScanError",
    "WriteError",
]
