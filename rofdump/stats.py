"""Per-channel statistics over a decoded record sequence."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from rofdump.utils.schema import ChannelStats, Record, RofHeader


def records_to_array(header: RofHeader, records: Iterable[Record]) -> np.ndarray:
    """Stack records into an array of shape [points, channels, 2].

    The last axis is (voltage, current).
    """
    rows = [[(r.voltage, r.current) for r in rec.readings] for rec in records]
    if not rows:
        return np.empty((0, header.channel_count, 2), dtype=np.float64)
    return np.asarray(rows, dtype=np.float64)


def compute_stats(header: RofHeader, records: Iterable[Record]) -> list[ChannelStats]:
    """Min, max and mean of voltage and current for every channel.

    Returns an empty list when there are no records.
    """
    data = records_to_array(header, records)
    if data.shape[0] == 0:
        return []

    mins = data.min(axis=0)
    maxs = data.max(axis=0)
    means = data.mean(axis=0)

    return [
        ChannelStats(
            channel=ch + 1,
            voltage_min=float(mins[ch, 0]),
            voltage_max=float(maxs[ch, 0]),
            voltage_mean=float(means[ch, 0]),
            current_min=float(mins[ch, 1]),
            current_max=float(maxs[ch, 1]),
            current_mean=float(means[ch, 1]),
            num_points=int(data.shape[0]),
        )
        for ch in range(data.shape[1])
    ]
