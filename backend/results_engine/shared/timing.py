"""Clock-time parsing and formatting for scraped result strings."""

from __future__ import annotations

import math
import re

from .constants import NO_TIME_SENTINELS

_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")


def parse_time(value: str | None) -> int | None:
    """Parse a clock-time string to whole seconds.

    Formats:
        "1:45:03"  → 6303   (H:MM:SS)
        "42:10"    → 2530   (M:SS)
        "95"       → 95     (bare seconds)
        "42:10.7"  → 2530   (fractions are truncated)
        "DNF"      → None   (also DNS / DQ, any case)

    Anything unparseable returns None; this never raises.
    """
    if not value or not isinstance(value, str):
        return None

    cleaned = value.strip()
    if not cleaned or cleaned.lower() in NO_TIME_SENTINELS:
        return None

    parts = [p.strip() for p in cleaned.split(":")]
    if len(parts) > 3 or not all(_NUMBER_RE.match(p) for p in parts):
        return None

    numbers = [float(p) for p in parts]
    if len(numbers) == 3:
        total = numbers[0] * 3600 + numbers[1] * 60 + numbers[2]
    elif len(numbers) == 2:
        total = numbers[0] * 60 + numbers[1]
    else:
        total = numbers[0]
    if not math.isfinite(total):
        return None
    return int(total)


def format_time(seconds: int | float) -> str:
    """Format seconds as the shortest canonical clock string.

    553   → "9:13"
    3125  → "52:05"
    3760  → "1:02:40"
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
