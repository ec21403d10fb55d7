"""Sequential decoder for .rof files.

Validates the header on open, then yields one record per timestamp,
reading the data region strictly front to back.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import IO, Any

import numpy as np

from rofdump.errors import (
    BadMagicError,
    FormatError,
    InconsistentLayoutError,
    TruncatedError,
    ZeroPointCountError,
)
from rofdump.storage.format import (
    MAGIC,
    OFFSET_DATA,
    OFFSET_PERIOD,
    OFFSET_POINT_COUNT,
    PAIR_WIDTH,
    SAMPLE_DTYPE,
    SAMPLE_SCALE,
    SAMPLE_WIDTH,
)
from rofdump.utils.schema import ChannelReading, Record, RofHeader

logger = logging.getLogger(__name__)


class DecoderState(Enum):
    UNOPENED = "unopened"
    VALIDATED = "validated"
    ITERATING = "iterating"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class Decoder:
    """Decoder for a single ROF byte source.

    The source is either a path, which the decoder opens and owns, or a
    seekable binary stream positioned anywhere, which is borrowed and left
    open on close. Offsets are absolute from the start of the stream.

    Records are produced once. After ``records()`` has been called, open a
    new decoder to read the file again.

    Args:
        source: Path to a .rof file, or a seekable binary stream.
        strict: Reject data regions that are not a whole multiple of
            ``point_count * 8`` at open time instead of failing mid-stream.
    """

    def __init__(self, source: str | Path | IO[bytes], strict: bool = False) -> None:
        if isinstance(source, (str, os.PathLike)):
            self.path: Path | None = Path(source)
            self._fp: IO[bytes] | None = None
            self._owns_fp = True
        else:
            self.path = None
            self._fp = source
            self._owns_fp = False

        self.strict = strict
        self._header: RofHeader | None = None
        self._state = DecoderState.UNOPENED

    def open(self) -> None:
        """Open the source, validate the header and derive the layout."""
        if self._state is not DecoderState.UNOPENED:
            raise RuntimeError(f"Decoder already opened (state: {self._state.value})")

        if self._owns_fp:
            assert self.path is not None
            self._fp = open(self.path, "rb")

        try:
            self._header = self._read_header()
        except (FormatError, OSError):
            self._state = DecoderState.FAILED
            self.close()
            raise

        self._state = DecoderState.VALIDATED
        logger.debug(
            "Opened %s: period=%ds points=%d channels=%d size=%d",
            self.name, self._header.period_seconds, self._header.point_count,
            self._header.channel_count, self._header.file_size,
        )

    def close(self) -> None:
        """Release the file handle if this decoder opened it."""
        if self._fp is not None and self._owns_fp:
            self._fp.close()
        self._fp = None

    def __enter__(self) -> Decoder:
        if self._state is DecoderState.UNOPENED:
            self.open()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # --- Properties ---

    @property
    def header(self) -> RofHeader:
        if self._header is None:
            raise RuntimeError("Decoder not opened. Call .open() first.")
        return self._header

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def name(self) -> str:
        """File stem, or a placeholder for anonymous streams."""
        if self.path is not None:
            return self.path.stem
        return getattr(self._fp, "name", "<stream>")

    # --- Header ---

    def _read_exact(self, size: int, field: str) -> bytes:
        assert self._fp is not None
        buf = self._fp.read(size)
        if len(buf) < size:
            raise TruncatedError(field, size, len(buf))
        return buf

    def _read_u32(self, field: str) -> int:
        return int.from_bytes(self._read_exact(SAMPLE_WIDTH, field), "little")

    def _read_header(self) -> RofHeader:
        fp = self._fp
        assert fp is not None

        fp.seek(0)
        magic = fp.read(len(MAGIC))
        if magic != MAGIC:
            raise BadMagicError(magic)

        fp.seek(OFFSET_PERIOD)
        period = self._read_u32("period")
        fp.seek(OFFSET_POINT_COUNT)
        point_count = self._read_u32("point_count")

        file_size = fp.seek(0, os.SEEK_END)
        if file_size < OFFSET_DATA:
            raise TruncatedError("header", OFFSET_DATA, file_size)
        if point_count == 0:
            raise ZeroPointCountError()

        data_size = file_size - OFFSET_DATA
        channel_count = data_size // point_count // PAIR_WIDTH

        if channel_count == 0 and data_size > 0:
            # Not even one channel per declared point
            raise TruncatedError("sample", point_count * PAIR_WIDTH, data_size)

        header = RofHeader(
            magic=magic,
            period_seconds=period,
            point_count=point_count,
            channel_count=channel_count,
            file_size=file_size,
        )
        # Clean layout: exactly point_count whole records
        if self.strict and (header.remainder or header.records_present != point_count):
            raise InconsistentLayoutError(data_size, point_count)

        fp.seek(OFFSET_DATA)
        return header

    # --- Records ---

    def records(self) -> Iterator[Record]:
        """Return the lazy record sequence.

        End of data is the only terminator. If the number of records read
        differs from the header's ``point_count``, a warning is logged.

        Raises:
            RuntimeError: If the decoder is not open or records were
                already requested.
        """
        if self._state is not DecoderState.VALIDATED:
            raise RuntimeError(
                f"Records can only be read once from a freshly opened decoder "
                f"(state: {self._state.value})"
            )
        if self._fp is None:
            raise RuntimeError("Decoder is closed.")
        self._state = DecoderState.ITERATING
        return self._iter_records(self.header, self._fp)

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def _iter_records(self, header: RofHeader, fp: IO[bytes]) -> Iterator[Record]:
        record_size = header.record_size
        pos = header.data_offset
        index = 0

        try:
            while pos < header.file_size:
                if self._fp is None:
                    raise RuntimeError("Decoder is closed.")
                buf = fp.read(record_size)
                if len(buf) < record_size:
                    raise TruncatedError("sample", record_size, len(buf))
                pos += record_size

                raw = np.frombuffer(buf, dtype=SAMPLE_DTYPE).reshape(header.channel_count, 2)
                values = raw / SAMPLE_SCALE
                yield Record(
                    index=index,
                    timestamp=index * header.period_seconds,
                    readings=tuple(ChannelReading(float(v), float(c)) for v, c in values),
                )
                index += 1
        except (FormatError, OSError, RuntimeError, ValueError):
            # ValueError: a borrowed stream closed by its owner mid-read
            self._state = DecoderState.FAILED
            raise

        self._state = DecoderState.EXHAUSTED
        if index != header.point_count:
            logger.warning(
                "%s declares %d data points but contains %d records",
                self.name, header.point_count, index,
            )


def open_rof(source: str | Path | IO[bytes], strict: bool = False) -> Decoder:
    """Open and validate a ROF source.

    Args:
        source: Path to a .rof file, or a seekable binary stream.
        strict: Reject data regions with trailing partial records up front.

    Returns:
        An opened ``Decoder``. Use it as a context manager to close it.

    Raises:
        FormatError: If the header is invalid.
        OSError: If the file cannot be opened or read.
    """
    decoder = Decoder(source, strict=strict)
    decoder.open()
    return decoder
