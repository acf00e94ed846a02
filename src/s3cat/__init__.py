"""s3cat: stream the lines of many S3 objects to stdout."""

from .config import StreamConfig
from .errors import S3CatError
from .pipeline import Pipeline, PipelineResult

__all__ = [
    "__version__",
    "Pipeline",
    "PipelineResult",
    "S3CatError",
    "StreamConfig",
]

__version__ = "0.1.0"
