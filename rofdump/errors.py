"""Exceptions raised while decoding ROF files.

I/O problems (missing file, permissions, failed seeks) surface as the usual
``OSError`` subclasses. Everything that is wrong with the bytes themselves is
a ``FormatError``.
"""

from __future__ import annotations


class FormatError(ValueError):
    """The source is not a well-formed ROF file."""


class BadMagicError(FormatError):
    def __init__(self, found: bytes) -> None:
        self.found = found
        super().__init__(f"Not an ROF file: expected magic b'ROF', got {found!r}")


class TruncatedError(FormatError):
    """A fixed-width field or sample could not be read in full."""

    def __init__(self, field: str, expected: int | None = None, got: int | None = None) -> None:
        self.field = field
        self.expected = expected
        self.got = got
        msg = f"Truncated ROF file: could not read {field}"
        if expected is not None and got is not None:
            msg += f" (wanted {expected} bytes, got {got})"
        super().__init__(msg)


class ZeroPointCountError(FormatError):
    def __init__(self) -> None:
        super().__init__("ROF header declares 0 data points; channel count is undefined")


class InconsistentLayoutError(FormatError):
    """Data region size is not a whole multiple of ``point_count * 8``."""

    def __init__(self, data_size: int, point_count: int) -> None:
        self.data_size = data_size
        self.point_count = point_count
        super().__init__(
            f"Inconsistent ROF layout: {data_size} data bytes is not a multiple "
            f"of point_count * 8 = {point_count * 8}"
        )
