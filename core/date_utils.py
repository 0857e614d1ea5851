"""ISO-8601 helpers used to validate and filter dated records."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Protocol, TypeVar

logger = logging.getLogger(__name__)

_ISO8601_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z?$")
_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class Dated(Protocol):
    date: str


D = TypeVar("D", bound=Dated)


def is_valid_iso8601(value: object) -> bool:
    """True for ``YYYY-MM-DDTHH:MM:SS[.mmm][Z]`` strings naming a real calendar instant."""

    if not isinstance(value, str) or not _ISO8601_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value[:19], "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    return True


def parse_iso8601(value: str | datetime) -> datetime:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Naive values are read as UTC. Raises ``ValueError`` when the string cannot be parsed.
    """

    if isinstance(value, datetime):
        parsed = value
    else:
        raw = str(value).strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def filter_by_date_range(
    items: Iterable[D],
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[D]:
    """Keep records dated within [start_date, end_date], both bounds inclusive and optional."""

    start = parse_iso8601(start_date) if start_date is not None else None
    end = parse_iso8601(end_date) if end_date is not None else None
    if start is None and end is None:
        return list(items)

    kept: list[D] = []
    for item in items:
        try:
            when = parse_iso8601(item.date)
        except (TypeError, ValueError):
            logger.warning("Ignoring record with unparseable date %r", getattr(item, "date", None))
            continue
        if start is not None and when < start:
            continue
        if end is not None and when > end:
            continue
        kept.append(item)
    return kept


def is_valid_month(value: object) -> bool:
    """True for ``YYYY-MM`` strings with a month between 01 and 12."""

    return isinstance(value, str) and _MONTH_PATTERN.match(value) is not None


__all__ = ["is_valid_iso8601", "parse_iso8601", "filter_by_date_range", "is_valid_month"]
