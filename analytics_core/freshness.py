"""Supplier freshness classification.

A supplier's last update is aged against ``now`` (always passed in, never read
from the clock) and placed in one of three tiers using half-open,
lower-inclusive cutoffs::

    [0, fresh_hours)            -> fresh
    [fresh_hours, stale_hours)  -> stale
    [stale_hours, inf)          -> outdated
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import pandas as pd

from analytics_core.errors import MalformedTimestamp, error_record
from analytics_core.formatting import TimestampLike, hours_since, parse_timestamp
from analytics_core.thresholds import FreshnessThresholds, validate_thresholds

logger = logging.getLogger(__name__)

TIERS = ("fresh", "stale", "outdated")
TIER_COLORS: Dict[str, str] = {
    "fresh": "#10b981",
    "stale": "#f59e0b",
    "outdated": "#ef4444",
}


@dataclass(frozen=True)
class SupplierSnapshot:
    name: str
    last_updated: Any
    record_count: int
    error_count: int = 0


@dataclass(frozen=True)
class ClassifiedSupplier:
    name: str
    last_updated: Any
    record_count: int
    error_count: int
    hours_ago: float
    tier: str
    color: str


@dataclass(frozen=True)
class TierSummary:
    count: int = 0
    total_records: int = 0
    total_errors: int = 0


@dataclass(frozen=True)
class SupplierError:
    supplier: str
    error: MalformedTimestamp

    def to_dict(self) -> Dict[str, Any]:
        return error_record("supplier", self.supplier, self.error)


@dataclass(frozen=True)
class ClassificationResult:
    classified: List[ClassifiedSupplier] = field(default_factory=list)
    errors: List[SupplierError] = field(default_factory=list)


def tier_for(hours_ago: float, thresholds: FreshnessThresholds) -> str:
    if hours_ago < thresholds.fresh_hours:
        return "fresh"
    if hours_ago < thresholds.stale_hours:
        return "stale"
    return "outdated"


def tier_color(tier: str) -> str:
    return TIER_COLORS[tier]


def classify(snapshot: SupplierSnapshot, thresholds: FreshnessThresholds, now: TimestampLike) -> ClassifiedSupplier:
    validate_thresholds(thresholds.fresh_hours, thresholds.stale_hours)
    now_ts = parse_timestamp(now)
    try:
        updated_ts = parse_timestamp(snapshot.last_updated)
    except MalformedTimestamp:
        raise MalformedTimestamp(snapshot.last_updated, supplier=snapshot.name) from None

    # Updates stamped in the future count as just-updated.
    hours_ago = hours_since(updated_ts, now_ts)
    tier = tier_for(hours_ago, thresholds)
    return ClassifiedSupplier(
        name=snapshot.name,
        last_updated=snapshot.last_updated,
        record_count=snapshot.record_count,
        error_count=snapshot.error_count,
        hours_ago=hours_ago,
        tier=tier,
        color=tier_color(tier),
    )


def classify_all(
    snapshots: Iterable[SupplierSnapshot],
    thresholds: FreshnessThresholds,
    now: TimestampLike,
) -> ClassificationResult:
    """Classify every snapshot independently, keeping input order.

    A supplier with an unparseable timestamp is reported in ``errors`` and does
    not stop the rest of the batch. Invalid thresholds or an invalid ``now``
    fail the whole call.
    """
    validate_thresholds(thresholds.fresh_hours, thresholds.stale_hours)
    parse_timestamp(now)

    result = ClassificationResult()
    for snapshot in snapshots:
        try:
            result.classified.append(classify(snapshot, thresholds, now))
        except MalformedTimestamp as exc:
            logger.warning("Skipping supplier %r: %s", snapshot.name, exc)
            result.errors.append(SupplierError(supplier=snapshot.name, error=exc))
    return result


def summarize(classified: Iterable[ClassifiedSupplier]) -> Dict[str, TierSummary]:
    frame = pd.DataFrame(
        [{"tier": c.tier, "record_count": c.record_count, "error_count": c.error_count} for c in classified],
        columns=["tier", "record_count", "error_count"],
    ).astype({"record_count": "int64", "error_count": "int64"})
    grouped = (
        frame.groupby("tier")
        .agg(
            count=("record_count", "size"),
            total_records=("record_count", "sum"),
            total_errors=("error_count", "sum"),
        )
        .reindex(list(TIERS), fill_value=0)
    )
    return {
        tier: TierSummary(
            count=int(row["count"]),
            total_records=int(row["total_records"]),
            total_errors=int(row["total_errors"]),
        )
        for tier, row in grouped.iterrows()
    }
