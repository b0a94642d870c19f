# study_planner/dates.py
"""Day-granularity date helpers and HH:MM wall-clock conversions."""
from datetime import date, time
from typing import Union

import pandas as pd


DateLike = Union[date, str, pd.Timestamp]


def to_calendar_date(value: DateLike) -> date:
    """Drop the time of day; tz-aware values keep their local wall date."""
    return pd.Timestamp(value).normalize().date()


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (to_calendar_date(end) - to_calendar_date(start)).days


def start_of_week(day: DateLike) -> date:
    """Sunday on or before the given date."""
    ts = pd.Timestamp(to_calendar_date(day))
    # pandas counts Monday as 0
    offset = (ts.dayofweek + 1) % 7
    return (ts - pd.Timedelta(days=offset)).date()


def time_to_minutes(value: Union[str, time]) -> int:
    """Minutes since midnight for "HH:MM" (or a datetime.time)."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    parts = str(value).strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"expected HH:MM, got {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 24 or minutes > 59 or (hours == 24 and minutes):
        raise ValueError(f"time out of range: {value!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"
