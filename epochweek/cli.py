from __future__ import annotations

import argparse
import logging
from datetime import datetime
from typing import List, Optional

from epochweek.core.config import load_config
from epochweek.core.epoch import (
    as_utc,
    from_epoch_seconds,
    now,
    to_epoch_seconds,
    to_epoch_seconds_precise,
)
from epochweek.core.errors import ConfigError, FormatError
from epochweek.core.week import resolve

SHOW_CHOICES = ("week", "epoch", "all")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Unix epoch and ISO-8601 week lookup")
    source = p.add_mutually_exclusive_group()
    source.add_argument("--date", default=None, help="ISO-8601 timestamp, Z suffix allowed (naive means UTC)")
    source.add_argument("--epoch", default=None, help="Seconds since 1970-01-01T00:00:00Z")
    p.add_argument("--show", default="all", choices=SHOW_CHOICES)
    p.add_argument("--precise", action="store_true", help="Print fractional epoch seconds")
    p.add_argument("--config", default="configs/epochweek.yaml")
    p.add_argument("--env", default=".env")
    p.add_argument("--log-level", default="INFO")
    return p


def parse_instant(date_arg: Optional[str], epoch_arg: Optional[str]) -> datetime:
    if epoch_arg is not None:
        return from_epoch_seconds(epoch_arg)
    if date_arg is not None:
        # fromisoformat only accepts a Z suffix from Python 3.11
        if date_arg.endswith(("Z", "z")):
            date_arg = date_arg[:-1] + "+00:00"
        return as_utc(datetime.fromisoformat(date_arg))
    return now()


def render(instant: datetime, show: str, precise: bool) -> List[str]:
    lines: List[str] = [f"instant: {instant.isoformat()}"]
    if show in ("epoch", "all"):
        if precise:
            lines.append(f"epoch: {to_epoch_seconds_precise(instant)}")
        else:
            lines.append(f"epoch: {to_epoch_seconds(instant)}")
    if show in ("week", "all"):
        week = resolve(instant)
        lines.extend(f"{key}: {value}" for key, value in week.to_dict().items())
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    log = logging.getLogger("epochweek.cli")

    try:
        cfg = load_config(args.config, args.env)
        instant = parse_instant(args.date, args.epoch)
        local = instant.astimezone(cfg.tzinfo)
        log.info("Resolving %s (offset %s)", local.isoformat(), cfg.utc_offset)
        lines = render(local, args.show, args.precise or cfg.precise)
    except (ConfigError, FormatError) as exc:
        parser.error(str(exc))
    except OverflowError as exc:
        parser.error(f"Instant out of supported range: {exc}")
    except ValueError as exc:
        parser.error(f"Invalid --date value: {exc}")

    for line in lines:
        print(line)


if __name__ == "__main__":
    main()
