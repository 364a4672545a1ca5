from datetime import date, datetime, timedelta, timezone

import pytest

from epochweek.core.epoch import from_epoch_seconds
from epochweek.core.week import (
    WeekDescriptor,
    first_day_of_week,
    iso_week_number,
    last_day_of_week,
    resolve,
    resolve_week,
)


def _utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def test_iso_week_number():
    assert iso_week_number(_utc(2026, 2, 6)) == 6
    assert iso_week_number(_utc(2021, 1, 4)) == 1


def test_first_and_last_day_of_week():
    t = datetime(2026, 2, 6, 15, 30, tzinfo=timezone.utc)
    assert first_day_of_week(t) == _utc(2026, 2, 2)
    assert last_day_of_week(t) == datetime(2026, 2, 8, 23, 59, 59, 999999, tzinfo=timezone.utc)


def test_week_keeps_offset():
    tz = timezone(timedelta(hours=-5))
    t = datetime(2026, 2, 6, 22, 0, tzinfo=tz)
    start = first_day_of_week(t)
    assert start.tzinfo == tz
    assert (start.hour, start.minute) == (0, 0)


def test_2020_12_31():
    w = resolve(_utc(2020, 12, 31))
    assert w.week == 53
    assert w.year == 2020


def test_2021_01_01_belongs_to_previous_year():
    w = resolve(_utc(2021, 1, 1))
    assert w.week == 53
    assert w.year == 2020
    assert w.start == _utc(2020, 12, 28)


def test_2016_01_01():
    w = resolve(_utc(2016, 1, 1))
    assert w.week == 53
    assert w.year == 2015
    assert w.end.date() == date(2016, 1, 3)


def test_2018_12_31_belongs_to_next_year():
    w = resolve(_utc(2018, 12, 31))
    assert w.week == 1
    assert w.year == 2019
    assert w.end.date() == date(2019, 1, 6)
    assert w.week_id == "2019-W01"


def test_ordinary_week_uses_own_year():
    w = resolve(_utc(2026, 2, 6))
    assert (w.year, w.week) == (2026, 6)


@pytest.mark.parametrize(
    "t",
    [
        _utc(2020, 12, 31),
        _utc(2021, 1, 3, 23),
        _utc(2024, 12, 30),
        _utc(2027, 1, 1),
        datetime(2026, 6, 14, 23, 59, 59, 999999, tzinfo=timezone.utc),
        datetime(2025, 12, 29, 0, 0, tzinfo=timezone(timedelta(hours=9))),
    ],
)
def test_week_span(t):
    w = resolve(t)
    assert w.start.isoweekday() == 1
    assert w.end.isoweekday() == 7
    assert w.start.time() == datetime.min.time()
    assert w.end - w.start == timedelta(days=7) - timedelta(microseconds=1)
    assert w.contains(t)


def test_year_matches_iso_calendar_across_boundaries():
    day = _utc(2014, 12, 1)
    while day < _utc(2030, 1, 31):
        w = resolve(day)
        iso = day.isocalendar()
        assert (w.year, w.week) == (iso[0], iso[1])
        day += timedelta(days=1)


def test_idempotent():
    for t in (_utc(2016, 1, 1), _utc(2018, 12, 31), from_epoch_seconds(1700000000)):
        w = resolve(t)
        assert resolve(w.start) == w
        assert resolve(w.end) == w


def test_naive_treated_as_utc():
    assert resolve(datetime(2021, 1, 1)) == resolve(_utc(2021, 1, 1))


def test_descriptor_is_frozen():
    w = resolve(_utc(2026, 2, 6))
    with pytest.raises(AttributeError):
        w.year = 1999


def test_to_dict():
    w = resolve(_utc(2020, 12, 31))
    assert w.to_dict() == {
        "year": 2020,
        "week": 53,
        "week_id": "2020-W53",
        "start": "2020-12-28T00:00:00+00:00",
        "end": "2021-01-03T23:59:59.999999+00:00",
    }


def test_resolve_week_defaults_to_now():
    w = resolve_week()
    assert isinstance(w, WeekDescriptor)
    assert w.contains(datetime.now(timezone.utc))


def test_resolve_week_with_value():
    assert resolve_week(_utc(2016, 1, 1)).year == 2015


def test_last_week_of_datetime_range_overflows():
    with pytest.raises(OverflowError):
        resolve(_utc(9999, 12, 31))
    assert resolve(_utc(9999, 12, 26)).end.date() == date(9999, 12, 26)
