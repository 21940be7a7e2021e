from __future__ import annotations

from typing import Any, Optional


class AnalyticsError(ValueError):
    """Base class for classification and alignment errors."""


class MalformedTimestamp(AnalyticsError):
    def __init__(self, value: Any, *, supplier: Optional[str] = None, series: Optional[str] = None) -> None:
        self.value = value
        self.supplier = supplier
        self.series = series
        owner = f" for supplier {supplier!r}" if supplier else (f" in series {series!r}" if series else "")
        super().__init__(f"Malformed timestamp{owner}: {value!r}")


class DuplicateDateInSeries(AnalyticsError):
    def __init__(self, series: str, date: str) -> None:
        self.series = series
        self.date = date
        super().__init__(f"Series {series!r} reports {date} more than once")


class ReservedSeriesName(AnalyticsError):
    def __init__(self, series: str) -> None:
        self.series = series
        super().__init__(f"Series name {series!r} is reserved for the row date")


class InvalidThresholds(AnalyticsError):
    def __init__(self, fresh_hours: Any, stale_hours: Any) -> None:
        self.fresh_hours = fresh_hours
        self.stale_hours = stale_hours
        super().__init__(
            f"Invalid freshness thresholds: fresh_hours={fresh_hours!r}, stale_hours={stale_hours!r} "
            "(both must be positive and stale_hours > fresh_hours)"
        )


def error_record(key: str, owner: str, error: Exception) -> dict:
    """Serialize a per-item error the way API error bodies are shaped."""
    return {key: owner, "error": str(error), "type": type(error).__name__}
