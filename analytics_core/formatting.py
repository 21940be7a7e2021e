from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Union

import pandas as pd

from analytics_core.errors import MalformedTimestamp

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

TimestampLike = Union[str, datetime, date, pd.Timestamp]

# pandas also reads keywords such as "now" and "today" off the wall clock, so
# strings must look like ISO-8601 before they reach pd.Timestamp.
_ISO_8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?"
    r"(?:Z|[+-]\d{2}(?::?\d{2})?)?$"
)


def _coerce_timestamp(value: Any) -> pd.Timestamp:
    if isinstance(value, str):
        value = value.strip()
        if not _ISO_8601.match(value):
            raise MalformedTimestamp(value)
    elif not isinstance(value, (datetime, date)):
        raise MalformedTimestamp(value)
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        raise MalformedTimestamp(value) from None
    if pd.isna(ts):
        raise MalformedTimestamp(value)
    return ts


def parse_timestamp(value: Any) -> pd.Timestamp:
    """Parse an ISO-8601 string or datetime into a UTC ``pd.Timestamp``.

    Naive values are taken to be UTC. Anything else raises ``MalformedTimestamp``.
    """
    ts = _coerce_timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def parse_calendar_day(value: Any) -> date:
    """Calendar day as written, without shifting offsets to UTC."""
    return _coerce_timestamp(value).date()


def elapsed_seconds(timestamp: TimestampLike, now: TimestampLike) -> float:
    """Seconds from ``timestamp`` to ``now``, clamped at zero for future timestamps."""
    delta = parse_timestamp(now) - parse_timestamp(timestamp)
    return max(0.0, delta.total_seconds())


def hours_since(timestamp: TimestampLike, now: TimestampLike) -> float:
    return elapsed_seconds(timestamp, now) / SECONDS_PER_HOUR


def days_since(timestamp: TimestampLike, now: TimestampLike) -> int:
    return int(math.ceil(elapsed_seconds(timestamp, now) / SECONDS_PER_DAY))


def format_magnitude(n: Union[int, float, str]) -> str:
    """Compact count label: 1.2M, 15.4K, 999.

    Thresholds compare the raw value, so 999_999 renders as "1000.0K" rather
    than being promoted to "1.0M".
    """
    if isinstance(n, str):
        text = n.strip()
        try:
            n = int(text)
        except ValueError:
            n = float(text)
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(int(n))


_WORD_START = re.compile(r"\b\w")


def title_case(snake: str) -> str:
    """``points_package`` -> ``Points Package``; only word-initial letters change."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), str(snake).replace("_", " "))


def format_last_updated(last_updated: Any, now: TimestampLike) -> str:
    try:
        elapsed = elapsed_seconds(last_updated, now)
    except MalformedTimestamp:
        return "Unknown"
    hours = int(elapsed // SECONDS_PER_HOUR)
    if hours == 0:
        minutes = int((elapsed % SECONDS_PER_HOUR) // 60)
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_chart_date(value: TimestampLike) -> str:
    """Short axis label, e.g. ``2024-01-05`` -> ``Jan 5``."""
    ts = parse_timestamp(value)
    return f"{ts.strftime('%b')} {ts.day}"
