"""Supplier freshness and activity analytics (UI-agnostic).

This package contains:
- freshness classification and per-tier summaries
- date alignment of independently sourced daily series
- payload schemas for the remote dashboard API (pydantic)
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""

from analytics_core.errors import (
    AnalyticsError,
    DuplicateDateInSeries,
    InvalidThresholds,
    MalformedTimestamp,
    ReservedSeriesName,
)
from analytics_core.formatting import days_since, format_magnitude, title_case
from analytics_core.freshness import (
    ClassificationResult,
    ClassifiedSupplier,
    SupplierError,
    SupplierSnapshot,
    TierSummary,
    classify,
    classify_all,
    summarize,
)
from analytics_core.series import AlignmentResult, SeriesError, TimePoint, align_series
from analytics_core.thresholds import FreshnessThresholds, normalize_thresholds

__all__ = [
    "AlignmentResult",
    "AnalyticsError",
    "ClassificationResult",
    "ClassifiedSupplier",
    "DuplicateDateInSeries",
    "FreshnessThresholds",
    "InvalidThresholds",
    "MalformedTimestamp",
    "ReservedSeriesName",
    "SeriesError",
    "SupplierError",
    "SupplierSnapshot",
    "TierSummary",
    "TimePoint",
    "align_series",
    "classify",
    "classify_all",
    "days_since",
    "format_magnitude",
    "normalize_thresholds",
    "summarize",
    "title_case",
]
