"""
Day-of-month resolution for report time groups.

Reports carry only day, hour and minute. The month comes from a base
time: the candidate in the previous, same or next month that lies
closest to the base is chosen, which handles month boundaries in both
directions.
"""

from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta


def is_valid_day_hour(day: int, hour: int, minute: int = 0) -> bool:
    """Day 1-31, hour 0-24 (24 only on the hour), minute 0-59."""
    if not 1 <= day <= 31 or not 0 <= minute <= 59:
        return False
    if hour == 24:
        return minute == 0
    return 0 <= hour <= 23


def resolve_day_hour(base: datetime, day: int, hour: int, minute: int = 0,
                     not_before: Optional[datetime] = None) -> datetime:
    """
    Resolve a day/hour/minute group against base.

    Hour 24 is 00 of the following day.

    Args:
        base: Time the group is expected to be near
        day: Day of month
        hour: Hour, 0-24
        minute: Minute
        not_before: If given, candidates earlier than this are ignored

    Returns:
        The resolved time, seconds and microseconds cleared

    Raises:
        ValueError: If no month around base has such a day
    """
    if not is_valid_day_hour(day, hour, minute):
        raise ValueError(f"Invalid day/hour/minute {day:02d}{hour:02d}{minute:02d}")

    extra_day = hour == 24
    if extra_day:
        hour = 0

    month_start = base.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    candidates = []
    for months in (-1, 0, 1):
        try:
            candidate = (month_start + relativedelta(months=months)).replace(
                day=day, hour=hour, minute=minute)
        except ValueError:
            # no such day in that month
            continue
        if extra_day:
            candidate += timedelta(days=1)
        if not_before is not None and candidate < not_before:
            continue
        candidates.append(candidate)

    if not candidates:
        raise ValueError(f"Cannot resolve day {day} near {base.isoformat()}")
    return min(candidates, key=lambda candidate: abs(candidate - base))
