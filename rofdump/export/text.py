r"""Plain-text report for decoded ROF files.

    Period: 5 second(s)
    Data points: 2
    Number of channels: 1

    0:\t10.000000(V), 5.000000(A)\t
    5:\t20.000000(V), 6.000000(A)\t
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from rofdump.utils.schema import Record, RofHeader


def format_summary(header: RofHeader) -> str:
    return (
        f"Period: {header.period_seconds} second(s)\n"
        f"Data points: {header.point_count}\n"
        f"Number of channels: {header.channel_count}\n"
    )


def format_record(record: Record) -> str:
    """One report line: timestamp then a tab-terminated pair per channel."""
    parts = [f"{record.timestamp}:\t"]
    parts.extend(f"{r.voltage:f}(V), {r.current:f}(A)\t" for r in record.readings)
    return "".join(parts)


def render_text(header: RofHeader, records: Iterable[Record], sink: TextIO) -> int:
    """Write the summary and one line per record.

    Returns:
        Number of record lines written.
    """
    sink.write(format_summary(header))
    sink.write("\n")

    rows = 0
    for record in records:
        sink.write(format_record(record))
        sink.write("\n")
        rows += 1
    return rows
