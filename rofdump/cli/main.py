"""rofdump CLI: inspect and convert ROF power-supply logs.

Commands:
    rofdump dump <file> [--csv]    Print the decoded log as text or CSV
    rofdump info <file>            Show header fields and channel statistics
    rofdump export <file>          Write the decoded log to a CSV file

Every option can also be set through a ROFDUMP_<COMMAND>_<OPTION>
environment variable, e.g. ROFDUMP_DUMP_CSV=1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rofdump import __version__
from rofdump.errors import FormatError

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _setup_logging(verbose: int) -> None:
    level = LOG_LEVELS.get(verbose, logging.DEBUG)
    logger = logging.getLogger("rofdump")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def _fail(file: Path, exc: Exception) -> NoReturn:
    err_console.print(f"[red]Error reading {escape(str(file))}: {escape(str(exc))}[/red]", soft_wrap=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="rofdump")
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or debug details (-vv)")
def cli(verbose: int) -> None:
    """rofdump: decode ROF logs from bench power supplies."""
    _setup_logging(verbose)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--csv", is_flag=True, default=False, help="Emit CSV instead of the text report")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write to this file instead of stdout")
@click.option("--strict", is_flag=True, default=False,
              help="Reject files whose data region has a trailing partial record")
def dump(file: Path, csv: bool, output: Path | None, strict: bool) -> None:
    """Print the decoded log as a text report or CSV."""
    from rofdump.export import OutputFormat, render
    from rofdump.storage.reader import open_rof

    fmt = OutputFormat.CSV if csv else OutputFormat.TEXT

    try:
        with open_rof(file, strict=strict) as decoder:
            with click.open_file(str(output) if output else "-", "w") as sink:
                rows = render(decoder.header, decoder.records(), sink, fmt)
    except (FormatError, OSError) as e:
        if output is not None and isinstance(e, FormatError):
            output.unlink(missing_ok=True)
        _fail(file, e)

    logging.getLogger("rofdump.cli").info("Rendered %d records as %s", rows, fmt.value)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, default=False,
              help="Reject files whose data region has a trailing partial record")
def info(file: Path, strict: bool) -> None:
    """Show header fields and per-channel statistics."""
    from rofdump.stats import compute_stats
    from rofdump.storage.reader import open_rof

    try:
        with open_rof(file, strict=strict) as decoder:
            header = decoder.header
            stats = compute_stats(header, decoder.records())
    except (FormatError, OSError) as e:
        _fail(file, e)

    console.print()
    console.print(Panel.fit(f"[bold]{escape(file.stem)}[/bold]", subtitle=escape(str(file))))

    meta_table = Table(show_header=False, box=None, padding=(0, 2))
    meta_table.add_column("Key", style="dim")
    meta_table.add_column("Value")
    meta_table.add_row("Period", f"{header.period_seconds} second(s)")
    meta_table.add_row("Data points", str(header.point_count))
    meta_table.add_row("Channels", str(header.channel_count))
    meta_table.add_row("Duration", f"{header.duration_seconds} second(s)")
    meta_table.add_row("File size", f"{header.file_size} bytes")
    console.print(meta_table)

    if stats:
        console.print()
        stats_table = Table(title="Channel Statistics")
        stats_table.add_column("Channel", justify="right")
        stats_table.add_column("V min", justify="right")
        stats_table.add_column("V max", justify="right")
        stats_table.add_column("V mean", justify="right")
        stats_table.add_column("A min", justify="right")
        stats_table.add_column("A max", justify="right")
        stats_table.add_column("A mean", justify="right")

        for stat in stats:
            stats_table.add_row(
                f"CH{stat.channel}",
                f"{stat.voltage_min:.4f}",
                f"{stat.voltage_max:.4f}",
                f"{stat.voltage_mean:.4f}",
                f"{stat.current_min:.4f}",
                f"{stat.current_max:.4f}",
                f"{stat.current_mean:.4f}",
            )
        console.print(stats_table)

    console.print()


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Output directory or file")
@click.option("--strict", is_flag=True, default=False,
              help="Reject files whose data region has a trailing partial record")
def export(file: Path, output: Path | None, strict: bool) -> None:
    """Export the decoded log to a CSV file."""
    from rofdump.export.csv import export_csv

    try:
        created = export_csv(file, output=output, strict=strict)
    except (FormatError, OSError) as e:
        _fail(file, e)

    console.print(f"  Created: {escape(str(created))}")
    console.print("[green]Exported 1 CSV file[/green]")


def main() -> None:
    cli(auto_envvar_prefix="ROFDUMP")


if __name__ == "__main__":
    main()
