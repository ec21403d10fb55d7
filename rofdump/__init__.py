"""rofdump: decoder for ROF bench power-supply logs.

ROF files hold a fixed header followed by raw voltage/current samples for
one or more channels at a fixed period. rofdump validates the header,
infers the channel count from the file size and yields calibrated records.

Quick start:
    from rofdump import open_rof, render, export_csv, OutputFormat

    with open_rof("bench.rof") as rof:
        print(rof.header.channel_count)
        for record in rof.records():
            print(record.timestamp, record.readings[0].voltage)

    # Render as CSV
    import sys
    with open_rof("bench.rof") as rof:
        render(rof.header, rof.records(), sys.stdout, OutputFormat.CSV)

    # Export to a file
    export_csv("bench.rof", output="exports/")
"""

__version__ = "0.1.0"

from rofdump.errors import (
    BadMagicError,
    FormatError,
    InconsistentLayoutError,
    TruncatedError,
    ZeroPointCountError,
)
from rofdump.export import OutputFormat, export_csv, render, render_csv, render_text
from rofdump.storage.reader import Decoder, DecoderState, open_rof
from rofdump.utils.schema import ChannelReading, Record, RofHeader

__all__ = [
    "BadMagicError",
    "ChannelReading",
    "Decoder",
    "DecoderState",
    "FormatError",
    "InconsistentLayoutError",
    "OutputFormat",
    "Record",
    "RofHeader",
    "TruncatedError",
    "ZeroPointCountError",
    "export_csv",
    "open_rof",
    "render",
    "render_csv",
    "render_text",
    "__version__",
]
