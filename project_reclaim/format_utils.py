"""
Shared formatting utilities for sizes and ages.

Byte counts are shown in binary units; ages use the compact `<n><unit>`
notation accepted by `--min-stale`.
"""

from __future__ import annotations

import argparse
import re
from datetime import timedelta
from typing import Optional

BYTES_PER_KIB = 1024
BYTES_PER_MIB = 1024**2
BYTES_PER_GIB = 1024**3
BYTES_PER_TIB = 1024**4

DAYS_PER_WEEK = 7
WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12

_DURATION_RE = re.compile(r"^(?P<n>\d+)(?P<unit>[dDwWmMyY])?$")


def format_bytes(num_bytes: Optional[int], decimal_places: int = 1) -> str:
    """
    Format byte count as human-readable string with binary units.

    Examples:
        >>> format_bytes(1024)
        '1.0 KiB'
        >>> format_bytes(None)
        'n/a'
    """
    if num_bytes is None:
        return "n/a"

    units = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
    value = float(num_bytes)
    for unit in units:
        if value < BYTES_PER_KIB or unit == units[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.{decimal_places}f} {unit}"
        value /= BYTES_PER_KIB
    return f"{value:.{decimal_places}f} PiB"


def parse_duration(value: str, *, for_argparse: bool = False) -> timedelta:
    """
    Parse ages such as "30d", "2w", "1m" or "1y" into a timedelta.

    A bare number means days; a month is 52/12 weeks and a year is 52 weeks.

    Raises:
        ValueError: If the string is invalid (when for_argparse=False)
        argparse.ArgumentTypeError: If invalid and for_argparse=True
    """
    match = _DURATION_RE.match(value.strip())
    if match is None:
        error_msg = (
            f'Cannot parse "{value}". Try "1d" for a day, "1w" for a week, '
            '"1m" for a month or "1y" for a year.'
        )
        if for_argparse:
            raise argparse.ArgumentTypeError(error_msg)
        raise ValueError(error_msg)

    count = int(match.group("n"))
    unit = (match.group("unit") or "d").lower()
    if unit == "d":
        return timedelta(days=count)
    if unit == "w":
        return timedelta(weeks=count)
    if unit == "m":
        return timedelta(days=DAYS_PER_WEEK * count * WEEKS_PER_YEAR // MONTHS_PER_YEAR)
    return timedelta(weeks=count * WEEKS_PER_YEAR)
