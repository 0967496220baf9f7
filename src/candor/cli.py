import os
import sys

import click
import yaml
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from candor.core.errors import ProducerError
from candor.core.factory import ProducerFactory
from candor.core.logs import setup_logging
from candor.core.settings import Settings
from candor.utils.files import format_size, get_file_size

console = Console(stderr=True)


def range_options(func):
    func = click.option("--upper", "-u", "upper_bound", type=int, required=True,
                        help="Exclusive upper bound")(func)
    func = click.option("--lower", "-l", "lower_bound", type=int, required=True,
                        help="Inclusive lower bound")(func)
    func = click.option("--padding", "-p", "padding_len", type=int, default=None,
                        help="Minimum width, left-padded with zeros")(func)
    return func


def _build(ctx, kind, **params):
    try:
        return ProducerFactory.from_config(kind, ctx.obj, **params)
    except ProducerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        ctx.exit(1)


def _stream(producer, progress: bool, terminator: bytes = b""):
    out = click.get_binary_stream("stdout")
    try:
        _write_all(producer, out, progress, terminator)
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); silence the exit flush
        try:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        except (OSError, ValueError):
            # stdout has no file descriptor, nothing left to flush
            pass
        sys.exit(0)


def _write_all(producer, out, progress: bool, terminator: bytes):
    with producer:
        if not progress:
            for candidate in producer:
                out.write(candidate + terminator)
            out.flush()
            return

        with Progress(console=console, transient=True) as bar:
            task = bar.add_task("Producing", total=producer.size() or None)
            for candidate in producer:
                out.write(candidate + terminator)
                bar.advance(task)
        out.flush()


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Log debug diagnostics")
@click.pass_context
def main(ctx, config_path, verbose):
    """Candor: lazy candidate producers for dictionaries and number ranges"""
    try:
        config = Settings(config_path).load()
        setup_logging("DEBUG" if verbose else config["logging"]["level"], console)
    except (yaml.YAMLError, ValueError, TypeError, KeyError, OSError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        ctx.exit(1)

    ctx.obj = config


@main.command()
@click.argument("path", type=click.Path())
@click.option("--scan-limit", "scan_limit_bytes", type=int, default=None,
              help="Estimate the line count for files larger than this many bytes")
@click.option("--progress", is_flag=True, help="Show a progress bar on stderr")
@click.pass_context
def lines(ctx, path, scan_limit_bytes, progress):
    """Stream every line of PATH as read, terminators included."""
    producer = _build(ctx, "lines", path=path, scan_limit_bytes=scan_limit_bytes)
    _stream(producer, progress)


@main.command("range")
@range_options
@click.option("--progress", is_flag=True, help="Show a progress bar on stderr")
@click.pass_context
def range_cmd(ctx, padding_len, lower_bound, upper_bound, progress):
    """Stream zero-padded numbers in [LOWER, UPPER), one per line."""
    producer = _build(ctx, "range", padding_len=padding_len,
                      lower_bound=lower_bound, upper_bound=upper_bound)
    _stream(producer, progress, terminator=b"\n")


# --- INFO GROUP ---
@main.group()
def info():
    """Describe a producer without consuming it."""
    pass


def _print_info(rows):
    table = Table(title="Producer")
    table.add_column("Property", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)


@info.command("lines")
@click.argument("path", type=click.Path())
@click.option("--scan-limit", "scan_limit_bytes", type=int, default=None)
@click.pass_context
def info_lines(ctx, path, scan_limit_bytes):
    """Show the line count of PATH."""
    producer = _build(ctx, "lines", path=path, scan_limit_bytes=scan_limit_bytes)
    with producer:
        _print_info([
            ("kind", "lines"),
            ("path", str(producer.path)),
            ("file size", format_size(get_file_size(producer.path))),
            ("size", f"{producer.size():,}"),
            ("estimated", "yes" if producer.size_is_estimate else "no"),
        ])


@info.command("range")
@range_options
@click.pass_context
def info_range(ctx, padding_len, lower_bound, upper_bound):
    """Show the size of a number range."""
    producer = _build(ctx, "range", padding_len=padding_len,
                      lower_bound=lower_bound, upper_bound=upper_bound)
    _print_info([
        ("kind", "range"),
        ("bounds", f"[{producer.lower_bound}, {producer.upper_bound})"),
        ("padding", str(producer.padding_len)),
        ("size", f"{producer.size():,}"),
    ])


if __name__ == "__main__":
    main()
