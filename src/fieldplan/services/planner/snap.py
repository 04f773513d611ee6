"""Timeline drop snapping.

All times are minutes from midnight.
"""

from __future__ import annotations

import math
from typing import Optional

GRID_MINUTES = 15
MINUTES_PER_DAY = 24 * 60


def snap_to_grid(
    raw_minutes: float,
    item_duration: float,
    gap_start: float,
    gap_end: float,
    grid_minutes: int = GRID_MINUTES,
) -> Optional[int]:
    """Snap a raw drop position to the nearest grid boundary that fits the gap.

    ``gap_start`` is inclusive and ``gap_end`` exclusive. Returns ``None`` when
    the item cannot start on any grid boundary inside the gap. Ties round half
    to even.
    """

    earliest_start = math.ceil(gap_start / grid_minutes) * grid_minutes
    latest_start = math.floor((gap_end - item_duration) / grid_minutes) * grid_minutes
    if earliest_start > latest_start:
        return None

    snapped = round(raw_minutes / grid_minutes) * grid_minutes
    return max(earliest_start, min(latest_start, snapped))


def minutes_to_hm(total_minutes: float) -> str:
    """Format minutes from midnight as ``HH:MM``, clamped to the day."""
    clamped = int(max(0, min(total_minutes, MINUTES_PER_DAY - 1)))
    hours, minutes = divmod(clamped, 60)
    return f"{hours:02d}:{minutes:02d}"


def parse_hm(value: str) -> int:
    """Parse ``HH:MM`` into minutes from midnight."""
    try:
        hours_text, minutes_text = value.strip().split(":")
        hours, minutes = int(hours_text), int(minutes_text)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid time '{value}', expected HH:MM.") from exc
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time '{value}', expected HH:MM.")
    return hours * 60 + minutes
