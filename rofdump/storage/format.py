"""ROF file format constants.

The .rof format is a fixed little-endian layout written by the instrument:

    offset 0    magic        3 bytes, ASCII "ROF"
    offset 16   period       u32, seconds between samples
    offset 20   point_count  u32, number of timestamps recorded
    offset 28   data         repeating (voltage: u32, current: u32) pairs,
                             channel-major within a timestamp,
                             timestamp-major overall

The channel count is not stored. It is derived from the file size.
"""

# Header
MAGIC = b"ROF"
OFFSET_PERIOD = 16
OFFSET_POINT_COUNT = 20
OFFSET_DATA = 28

# Samples
SAMPLE_WIDTH = 4  # bytes per raw u32
PAIR_WIDTH = 2 * SAMPLE_WIDTH  # one channel's (voltage, current)
SAMPLE_DTYPE = "<u4"
SAMPLE_SCALE = 10000.0  # physical value = raw / SAMPLE_SCALE

# File extension
FILE_EXTENSION = ".rof"
