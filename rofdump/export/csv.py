"""CSV rendering and export for ROF files.

Layout, one row per timestamp:

    Seconds,CH1 Voltage,CH1 Current,CH2 Voltage,CH2 Current,...
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from rofdump.errors import FormatError
from rofdump.storage.reader import open_rof
from rofdump.utils.schema import Record, RofHeader

logger = logging.getLogger(__name__)


def build_column_headers(channel_count: int) -> list[str]:
    headers = ["Seconds"]
    for ch in range(1, channel_count + 1):
        headers.append(f"CH{ch} Voltage")
        headers.append(f"CH{ch} Current")
    return headers


def render_csv(header: RofHeader, records: Iterable[Record], sink: TextIO) -> int:
    """Write the column header and one row per record.

    Returns:
        Number of data rows written.
    """
    writer = csv.writer(sink, lineterminator="\n")
    writer.writerow(build_column_headers(header.channel_count))

    rows = 0
    for record in records:
        row: list[str] = [str(record.timestamp)]
        for reading in record.readings:
            row.append(f"{reading.voltage:f}")
            row.append(f"{reading.current:f}")
        writer.writerow(row)
        rows += 1
    return rows


def export_csv(
    path: str | Path,
    output: str | Path | None = None,
    strict: bool = False,
) -> Path:
    """Decode a .rof file into a CSV file.

    Args:
        path: Path to the .rof file.
        output: Output directory or file. Defaults to ``<stem>.csv`` next to
            the input. An existing directory receives ``<stem>.csv``.
        strict: Passed through to ``open_rof``.

    Returns:
        Path to the created CSV file.
    """
    path = Path(path)

    if output is None:
        out_path = path.with_suffix(".csv")
    else:
        out_path = Path(output)
        if out_path.is_dir() or not out_path.suffix:
            out_path.mkdir(parents=True, exist_ok=True)
            out_path = out_path / f"{path.stem}.csv"
        else:
            out_path.parent.mkdir(parents=True, exist_ok=True)

    with open_rof(path, strict=strict) as decoder:
        try:
            with open(out_path, "w", newline="") as f:
                rows = render_csv(decoder.header, decoder.records(), f)
        except FormatError:
            out_path.unlink(missing_ok=True)
            raise

    logger.info("Wrote %s with %d rows", out_path, rows)
    return out_path
