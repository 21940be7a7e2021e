import types
from datetime import datetime

import pandas as pd
import pytest

from analytics_core.errors import InvalidThresholds, MalformedTimestamp
from analytics_core.freshness import (
    TIER_COLORS,
    SupplierSnapshot,
    TierSummary,
    classify,
    classify_all,
    summarize,
)
from analytics_core.thresholds import FreshnessThresholds

NOW = "2024-06-01T12:00:00Z"
THRESHOLDS = FreshnessThresholds(fresh_hours=6, stale_hours=24)


def snapshot(name, hours_ago, record_count=100, error_count=0):
    updated = pd.Timestamp(NOW) - pd.Timedelta(hours=hours_ago)
    return SupplierSnapshot(name=name, last_updated=updated.isoformat(), record_count=record_count, error_count=error_count)


@pytest.mark.parametrize(
    "hours_ago, tier",
    [
        (0, "fresh"),
        (5.999, "fresh"),
        (6, "stale"),
        (23.999, "stale"),
        (24, "outdated"),
        (72, "outdated"),
    ],
)
def test_tier_boundaries_are_lower_inclusive(hours_ago, tier):
    result = classify(snapshot("Expedia", hours_ago), THRESHOLDS, NOW)
    assert result.tier == tier
    assert result.color == TIER_COLORS[tier]


def test_classified_supplier_carries_snapshot_fields():
    source = snapshot("Agoda", 8, record_count=18750, error_count=2)
    result = classify(source, THRESHOLDS, NOW)
    assert result.name == "Agoda"
    assert result.last_updated == source.last_updated
    assert result.record_count == 18750
    assert result.error_count == 2
    assert result.hours_ago == pytest.approx(8.0)


def test_future_timestamp_is_clamped_to_zero_hours():
    result = classify(snapshot("Restel", -3), THRESHOLDS, NOW)
    assert result.hours_ago == 0.0
    assert result.tier == "fresh"


def test_naive_now_is_treated_as_utc():
    aware = classify(snapshot("Hotels.com", 18), THRESHOLDS, NOW)
    naive = classify(snapshot("Hotels.com", 18), THRESHOLDS, datetime(2024, 6, 1, 12, 0, 0))
    assert aware == naive


def test_tier_colors_are_distinct():
    assert len(set(TIER_COLORS.values())) == 3


def test_classify_is_idempotent():
    source = snapshot("Booking.com", 4, record_count=23150)
    assert classify(source, THRESHOLDS, NOW) == classify(source, THRESHOLDS, NOW)


def test_classify_rejects_unparseable_timestamp():
    bad = SupplierSnapshot(name="Broken", last_updated="yesterday-ish", record_count=1)
    with pytest.raises(MalformedTimestamp) as exc_info:
        classify(bad, THRESHOLDS, NOW)
    assert exc_info.value.supplier == "Broken"


@pytest.mark.parametrize("keyword", ["now", "today"])
def test_clock_keyword_timestamp_is_reported_not_classified(keyword):
    result = classify_all([SupplierSnapshot(name="X", last_updated=keyword, record_count=1)], THRESHOLDS, NOW)
    assert result.classified == []
    assert [e.supplier for e in result.errors] == ["X"]


def test_clock_keyword_now_is_rejected():
    with pytest.raises(MalformedTimestamp):
        classify(snapshot("Expedia", 1), THRESHOLDS, "now")


def test_classify_refuses_inconsistent_thresholds():
    inverted = types.SimpleNamespace(fresh_hours=24, stale_hours=6)
    with pytest.raises(InvalidThresholds):
        classify(snapshot("Expedia", 1), inverted, NOW)


def test_classify_all_reports_bad_supplier_without_aborting_batch():
    snapshots = [
        snapshot("Expedia", 2),
        SupplierSnapshot(name="Agoda", last_updated="not a timestamp", record_count=5),
        snapshot("Restel", 32),
    ]
    result = classify_all(snapshots, THRESHOLDS, NOW)

    assert [c.name for c in result.classified] == ["Expedia", "Restel"]
    assert len(result.errors) == 1
    assert result.errors[0].supplier == "Agoda"
    assert isinstance(result.errors[0].error, MalformedTimestamp)
    assert result.errors[0].to_dict() == {
        "supplier": "Agoda",
        "error": str(result.errors[0].error),
        "type": "MalformedTimestamp",
    }


def test_classify_all_preserves_input_order():
    names = ["Restel", "Expedia", "Hotels.com", "Agoda"]
    hours = [32, 2, 18, 8]
    result = classify_all([snapshot(n, h) for n, h in zip(names, hours)], THRESHOLDS, NOW)
    assert [c.name for c in result.classified] == names


def test_classify_all_invalid_thresholds_fail_the_call():
    inverted = types.SimpleNamespace(fresh_hours=10, stale_hours=10)
    with pytest.raises(InvalidThresholds):
        classify_all([snapshot("Expedia", 1)], inverted, NOW)


def test_summarize_partitions_every_supplier_once():
    snapshots = [
        snapshot("Expedia", 2, record_count=15420, error_count=0),
        snapshot("Booking.com", 4, record_count=23150, error_count=0),
        snapshot("Agoda", 8, record_count=18750, error_count=2),
        snapshot("Hotels.com", 18, record_count=12300, error_count=1),
        snapshot("Restel", 32, record_count=8900, error_count=5),
    ]
    classified = classify_all(snapshots, THRESHOLDS, NOW).classified
    summary = summarize(classified)

    assert sum(s.count for s in summary.values()) == len(classified)
    assert summary["fresh"] == TierSummary(count=2, total_records=38570, total_errors=0)
    assert summary["stale"] == TierSummary(count=2, total_records=31050, total_errors=3)
    assert summary["outdated"] == TierSummary(count=1, total_records=8900, total_errors=5)


def test_summarize_zero_fills_empty_tiers():
    classified = classify_all([snapshot("Expedia", 1, record_count=7)], THRESHOLDS, NOW).classified
    summary = summarize(classified)
    assert list(summary) == ["fresh", "stale", "outdated"]
    assert summary["stale"] == TierSummary(count=0, total_records=0, total_errors=0)
    assert summary["outdated"] == TierSummary()


def test_summarize_empty_input():
    summary = summarize([])
    assert summary == {tier: TierSummary() for tier in ("fresh", "stale", "outdated")}
