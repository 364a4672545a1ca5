from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import timedelta, timezone
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from epochweek.core.errors import ConfigError

OFFSET_ENV = "EPOCHWEEK_UTC_OFFSET"

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def load_env(env_path: str | None = None) -> None:
    load_dotenv(dotenv_path=env_path, override=False)


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_utc_offset(value: str) -> timedelta:
    value = value.strip()
    if value.upper() == "Z":
        return timedelta(0)
    match = _OFFSET_PATTERN.match(value)
    if not match:
        raise ConfigError(f"Invalid UTC offset: {value!r} (expected +HH:MM, -HH:MM or Z)")
    sign, hours, minutes = match.groups()
    if int(hours) > 23 or int(minutes) > 59:
        raise ConfigError(f"UTC offset out of range: {value!r}")
    offset = timedelta(hours=int(hours), minutes=int(minutes))
    return -offset if sign == "-" else offset


@dataclass(frozen=True)
class EpochWeekConfig:
    utc_offset: timedelta = timedelta(0)
    precise: bool = False

    @property
    def tzinfo(self) -> timezone:
        if not self.utc_offset:
            return timezone.utc
        return timezone(self.utc_offset)


def load_config(path: Optional[str] = None, env_path: Optional[str] = None) -> EpochWeekConfig:
    load_env(env_path)
    raw: Dict[str, Any] = {}
    if path and os.path.exists(path):
        raw = load_yaml(path).get("epochweek", {}) or {}

    offset_raw = os.getenv(OFFSET_ENV) or raw.get("utc_offset") or "Z"
    precise = raw.get("precise", False)
    if not isinstance(precise, bool):
        raise ConfigError(f"'precise' must be a boolean, got {precise!r}")
    return EpochWeekConfig(
        utc_offset=parse_utc_offset(str(offset_raw)),
        precise=precise,
    )
