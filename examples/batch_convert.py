"""rofdump Example: Batch Conversion

Converts every .rof file in a directory to CSV and prints a summary table
of header fields and per-channel voltage ranges.

Run:
    python examples/batch_convert.py path/to/logs [output_dir]

Output:
    - One <name>.csv per input file in output_dir (default: next to inputs)
    - A summary table on stdout; files that fail to decode are listed last
"""

import sys
from pathlib import Path

from rofdump import FormatError, export_csv, open_rof
from rofdump.stats import compute_stats
from rofdump.storage.format import FILE_EXTENSION


def summarize(path: Path) -> str:
    with open_rof(path) as rof:
        header = rof.header
        stats = compute_stats(header, rof.records())

    ranges = ", ".join(
        f"CH{s.channel} {s.voltage_min:.3f}-{s.voltage_max:.3f} V" for s in stats
    )
    return (
        f"{path.name:<24} {header.period_seconds:>6}s {header.point_count:>8} "
        f"{header.channel_count:>4}  {ranges}"
    )


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        raise SystemExit(2)

    in_dir = Path(sys.argv[1])
    out_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    print(f"{'File':<24} {'Period':>7} {'Points':>8} {'Ch':>4}  Voltage range")
    print("-" * 72)

    failed: list[tuple[Path, str]] = []
    for path in sorted(in_dir.glob(f"*{FILE_EXTENSION}")):
        try:
            print(summarize(path))
            export_csv(path, output=out_dir)
        except FormatError as e:
            failed.append((path, str(e)))

    if failed:
        print()
        print(f"{len(failed)} file(s) could not be decoded:")
        for path, reason in failed:
            print(f"  {path.name}: {reason}")


if __name__ == "__main__":
    main()
