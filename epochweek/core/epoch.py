from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Union

from epochweek.core.errors import FormatError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INT_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

log = logging.getLogger("epochweek.epoch")

EpochValue = Union[int, float, str]


def now() -> datetime:
    return datetime.now(timezone.utc)


def now_epoch_seconds() -> int:
    return to_epoch_seconds(now())


def now_epoch_seconds_precise() -> float:
    return to_epoch_seconds_precise(now())


def as_utc(t: datetime) -> datetime:
    # naive values are taken as UTC, never as host-local time
    if t.tzinfo is None or t.utcoffset() is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def parse_epoch_string(value: str) -> int:
    if not _INT_PATTERN.match(value):
        raise FormatError(value)
    return int(value.strip())


def from_epoch_seconds(value: EpochValue) -> datetime:
    """Return the UTC instant `value` seconds after 1970-01-01T00:00:00Z.

    Strings must hold a base-10 integer and raise FormatError otherwise.
    Values outside the datetime range raise OverflowError.
    NaN and infinite floats raise ValueError.
    """
    if isinstance(value, bool):
        raise TypeError("Epoch value must be int, float or str, not bool")
    if isinstance(value, str):
        value = parse_epoch_string(value)
    elif not isinstance(value, (int, float)):
        raise TypeError(f"Unsupported epoch value type: {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Epoch value must be finite, got {value!r}")
    log.debug("Converting epoch value %s", value)
    return EPOCH + timedelta(seconds=value)


def _elapsed(t: datetime) -> timedelta:
    return as_utc(t) - EPOCH


def to_epoch_seconds(t: datetime) -> int:
    # floors; 1969-12-31T23:59:59.5Z is -1
    delta = _elapsed(t)
    return delta.days * 86400 + delta.seconds


def to_epoch_seconds_precise(t: datetime) -> float:
    return _elapsed(t).total_seconds()
