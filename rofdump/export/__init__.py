"""Output renderers for decoded ROF files."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TextIO

from rofdump.export.csv import export_csv, render_csv
from rofdump.export.text import render_text
from rofdump.utils.schema import Record, RofHeader


class OutputFormat(str, Enum):
    TEXT = "text"
    CSV = "csv"


def render(
    header: RofHeader,
    records: Iterable[Record],
    sink: TextIO,
    fmt: OutputFormat = OutputFormat.TEXT,
) -> int:
    """Render records to ``sink`` in the chosen format. Returns rows written."""
    if fmt is OutputFormat.CSV:
        return render_csv(header, records, sink)
    if fmt is OutputFormat.TEXT:
        return render_text(header, records, sink)
    raise ValueError(f"Unknown output format: {fmt!r}")


__all__ = ["OutputFormat", "export_csv", "render", "render_csv", "render_text"]
