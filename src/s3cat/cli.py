"""s3cat command-line entry point."""

import sys

import click

from . import __version__
from .config import DEFAULT_CONCURRENCY, StreamConfig
from .context import pass_context
from .errors import ConfigError
from .names import name_source
from .pipeline import Pipeline


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-c",
    "--concurrency",
    type=int,
    default=DEFAULT_CONCURRENCY,
    show_default=True,
    envvar="S3CAT_CONCURRENCY",
    help="Number of concurrent object reads (clamped to 1-16)",
)
@click.option(
    "-p",
    "--prefix",
    default=None,
    envvar="S3CAT_PREFIX",
    metavar="S3_URL",
    help="Default s3://bucket[/prefix] to read relative keys from",
)
@click.argument("names", nargs=-1)
@click.version_option(__version__, prog_name="s3cat")
@pass_context
def cli(ctx, concurrency, prefix, names):
    """Stream the lines of S3 objects to stdout.

    Objects are named as s3://bucket/key, or as keys relative to --prefix.
    With no NAMES, names are read from stdin, one per line. Gzip-compressed
    objects are decompressed on the fly.

    Lines from one object stay in order; lines from different objects are
    interleaved in blocks of up to 1000.

    Examples:
        s3cat s3://logs/2024/01/app.log.gz
        s3cat -p s3://logs/2024/01/ app-1.log app-2.log.gz
        aws s3 ls s3://logs/2024/01/ | awk '{print $4}' | s3cat -p s3://logs/2024/01/ -c 16
    """
    source = name_source(names, click.get_text_stream("stdin"))
    try:
        config = StreamConfig.from_options(
            concurrency, prefix, source.known_count
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = Pipeline(ctx.store, config).run(source)
    if not result.ok:
        click.echo(f"{result.errors} errors.", err=True)
        sys.exit(1)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
