"""Formatting of the current local time."""

from __future__ import annotations

import enum
from datetime import datetime


class TimeFormat(enum.IntEnum):
    """Layouts of the time string returned by :func:`local_time`."""

    DATETIME = 0
    DATE = 1
    TIME = 2


def local_time(fmt: int = TimeFormat.DATETIME, now: datetime | None = None) -> str:
    """Return ``now`` (default: the current local time) in the given layout."""
    try:
        layout = TimeFormat(fmt)
    except ValueError:
        raise ValueError(f"unknown time format: {fmt!r}") from None
    t = now if now is not None else datetime.now()
    date = f"{t.year:02d}-{t.month:02d}-{t.day:02d}"
    clock = f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    if layout is TimeFormat.DATE:
        return date
    if layout is TimeFormat.TIME:
        return clock
    return f"{date} {clock}"