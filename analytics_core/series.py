from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from analytics_core.errors import (
    AnalyticsError,
    DuplicateDateInSeries,
    MalformedTimestamp,
    ReservedSeriesName,
    error_record,
)
from analytics_core.formatting import parse_calendar_day

logger = logging.getLogger(__name__)

DATE_KEY = "date"


@dataclass(frozen=True)
class TimePoint:
    date: str
    value: float


PointLike = Union[TimePoint, Mapping[str, Any]]


@dataclass(frozen=True)
class SeriesError:
    series: str
    error: AnalyticsError

    def to_dict(self) -> Dict[str, Any]:
        return error_record("series", self.series, self.error)


@dataclass(frozen=True)
class AlignmentResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[SeriesError] = field(default_factory=list)

    @property
    def failed_series(self) -> List[str]:
        return [e.series for e in self.errors]


def _as_point(point: PointLike) -> Tuple[Any, Any]:
    if isinstance(point, TimePoint):
        return point.date, point.value
    return point.get("date"), point.get("value")


def _series_values(name: str, points: Iterable[PointLike]) -> Dict[date, Any]:
    if name == DATE_KEY:
        raise ReservedSeriesName(name)
    values: Dict[date, Any] = {}
    for point in points:
        raw_date, value = _as_point(point)
        try:
            day = parse_calendar_day(raw_date)
        except MalformedTimestamp:
            raise MalformedTimestamp(raw_date, series=name) from None
        if day in values:
            raise DuplicateDateInSeries(name, day.isoformat())
        values[day] = value
    return values


def align_series(series: Mapping[str, Iterable[PointLike]]) -> AlignmentResult:
    """Merge independently sourced daily series into one date-ordered table.

    Each output row holds ``date`` (``YYYY-MM-DD``) plus one key per series
    that reported that day. Series that did not report a day are left out of
    the row rather than zero-filled. A series with a duplicate or unparseable
    date is dropped and reported in ``errors``; the others still align.
    """
    by_day: Dict[date, Dict[str, Any]] = {}
    errors: List[SeriesError] = []
    for name, points in series.items():
        try:
            values = _series_values(name, points)
        except AnalyticsError as exc:
            logger.warning("Dropping series %r from alignment: %s", name, exc)
            errors.append(SeriesError(series=name, error=exc))
            continue
        for day, value in values.items():
            row = by_day.setdefault(day, {DATE_KEY: day.isoformat()})
            row[name] = value

    return AlignmentResult(rows=[by_day[day] for day in sorted(by_day)], errors=errors)
