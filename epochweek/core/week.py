from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, Optional

from epochweek.core.epoch import now

log = logging.getLogger("epochweek.week")


def _aware(t: datetime) -> datetime:
    if t.tzinfo is None or t.utcoffset() is None:
        return t.replace(tzinfo=timezone.utc)
    return t


def iso_week_number(t: datetime) -> int:
    return t.isocalendar()[1]


def first_day_of_week(t: datetime) -> datetime:
    # ISO week starts Monday, at midnight in t's own offset
    t = _aware(t)
    monday = t.date() - timedelta(days=t.isoweekday() - 1)
    return datetime.combine(monday, time.min, tzinfo=t.tzinfo)


def last_day_of_week(t: datetime) -> datetime:
    # last representable instant before the following Monday
    return first_day_of_week(t) + timedelta(days=7) - timedelta(microseconds=1)


@dataclass(frozen=True)
class WeekDescriptor:
    year: int
    week: int
    start: datetime
    end: datetime

    @property
    def week_id(self) -> str:
        return f"{self.year:04d}-W{self.week:02d}"

    def contains(self, t: datetime) -> bool:
        return self.start <= _aware(t) <= self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "week": self.week,
            "week_id": self.week_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


def resolve(t: datetime) -> WeekDescriptor:
    """Build the ISO-8601 week descriptor for `t`.

    The week-based year is taken from the end of the week for a week 1 that
    ends in January, from the start of the week for a week 50+ that starts in
    December, and from `t` itself otherwise. The order of these checks matters.
    Weeks ending after 9999-12-31 raise OverflowError.
    """
    t = _aware(t)
    week = iso_week_number(t)
    start = first_day_of_week(t)
    end = last_day_of_week(t)

    if end.month == 1 and week == 1:
        year = end.year
    elif start.month == 12 and week >= 50:
        year = start.year
    else:
        year = t.year

    log.debug("Resolved %s to %04d-W%02d", t.isoformat(), year, week)
    return WeekDescriptor(year=year, week=week, start=start, end=end)


def resolve_week(t: Optional[datetime] = None) -> WeekDescriptor:
    return resolve(now() if t is None else t)
