"""Data structures for decoded ROF files."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rofdump.storage.format import MAGIC, OFFSET_DATA, PAIR_WIDTH

U32_MAX = 2**32 - 1


class RofHeader(BaseModel):
    """Header fields plus the layout derived from the file size.

    Built once when a file is opened and immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    magic: bytes = MAGIC
    period_seconds: int = Field(ge=0, le=U32_MAX)
    point_count: int = Field(ge=1, le=U32_MAX)
    channel_count: int = Field(ge=0)
    file_size: int = Field(ge=OFFSET_DATA)
    data_offset: int = OFFSET_DATA

    @field_validator("magic")
    @classmethod
    def check_magic(cls, v: bytes) -> bytes:
        if v != MAGIC:
            raise ValueError(f"magic must be {MAGIC!r}, got {v!r}")
        return v

    @property
    def data_size(self) -> int:
        """Bytes in the data region."""
        return self.file_size - self.data_offset

    @property
    def record_size(self) -> int:
        """Bytes in one record (all channels at one timestamp)."""
        return self.channel_count * PAIR_WIDTH

    @property
    def records_present(self) -> int:
        """Whole records that fit in the data region."""
        if self.record_size == 0:
            return 0
        return self.data_size // self.record_size

    @property
    def remainder(self) -> int:
        """Trailing bytes that do not form a whole record."""
        if self.record_size == 0:
            return self.data_size
        return self.data_size % self.record_size

    @property
    def duration_seconds(self) -> int:
        return (self.point_count - 1) * self.period_seconds

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str) -> RofHeader:
        return cls.model_validate_json(data)


@dataclass(frozen=True)
class ChannelReading:
    """One channel's calibrated sample pair."""

    voltage: float
    current: float


@dataclass(frozen=True)
class Record:
    """All channel readings at one timestamp."""

    index: int
    timestamp: int  # seconds since start, index * period
    readings: tuple[ChannelReading, ...]


class ChannelStats(BaseModel):
    """Summary statistics for one channel over a whole file."""

    channel: int  # 1-based, as printed in CSV headers
    voltage_min: float
    voltage_max: float
    voltage_mean: float
    current_min: float
    current_max: float
    current_mean: float
    num_points: int
