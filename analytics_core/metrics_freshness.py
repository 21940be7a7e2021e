from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional, Union

from analytics_core.charts import freshness_chart, to_vega_spec
from analytics_core.formatting import TimestampLike, days_since, format_last_updated, parse_timestamp
from analytics_core.freshness import ClassifiedSupplier, classify_all, summarize
from analytics_core.schemas import (
    DashboardResponseModel,
    SupplierFreshnessResponseModel,
    parse_payload,
)
from analytics_core.thresholds import FreshnessThresholds, normalize_thresholds


def _resolve_thresholds(
    explicit: Optional[FreshnessThresholds],
    model: SupplierFreshnessResponseModel,
) -> FreshnessThresholds:
    if explicit is not None:
        return explicit
    if model.thresholds is not None:
        return normalize_thresholds(model.thresholds.to_raw())
    return FreshnessThresholds()


def _supplier_row(c: ClassifiedSupplier, now: TimestampLike) -> Dict[str, Any]:
    row = asdict(c)
    row["last_updated"] = parse_timestamp(c.last_updated).isoformat()
    row["days_since_update"] = days_since(c.last_updated, now)
    row["last_updated_label"] = format_last_updated(c.last_updated, now)
    return row


def _last_global_update(model: SupplierFreshnessResponseModel, classified: List[ClassifiedSupplier]) -> Optional[str]:
    if model.summary is not None and model.summary.last_global_update:
        return model.summary.last_global_update
    if not classified:
        return None
    return max(parse_timestamp(c.last_updated) for c in classified).isoformat()


def compute_supplier_freshness(
    payload: Union[SupplierFreshnessResponseModel, Mapping[str, Any], None],
    *,
    now: TimestampLike,
    thresholds: Optional[FreshnessThresholds] = None,
) -> Dict[str, Any]:
    model = parse_payload(SupplierFreshnessResponseModel, payload)
    thresholds = _resolve_thresholds(thresholds, model)
    result = classify_all([s.to_snapshot() for s in model.suppliers], thresholds, now)
    summary = summarize(result.classified)

    charts: Dict[str, Any] = {}
    if result.classified:
        charts["freshness"] = to_vega_spec(freshness_chart(result.classified, thresholds))

    return {
        "thresholds": asdict(thresholds),
        "suppliers": [_supplier_row(c, now) for c in result.classified],
        "summary": {
            "total_suppliers": len(result.classified),
            "unclassified": len(result.errors),
            **{tier: asdict(s) for tier, s in summary.items()},
            "last_global_update": _last_global_update(model, result.classified),
        },
        "errors": [e.to_dict() for e in result.errors],
        "charts": charts,
    }


def compute_platform_suppliers(
    payload: Union[DashboardResponseModel, Mapping[str, Any], None],
    *,
    now: TimestampLike,
    thresholds: Optional[FreshnessThresholds] = None,
) -> Dict[str, Any]:
    """Supplier coverage rows for the overview page, largest hotel count first."""
    model = parse_payload(DashboardResponseModel, payload)
    thresholds = thresholds or FreshnessThresholds()
    suppliers = model.platform_overview.available_suppliers
    result = classify_all([s.to_snapshot() for s in suppliers], thresholds, now)

    rows = [
        {
            "name": c.name,
            "hotel_count": c.record_count,
            "last_updated": parse_timestamp(c.last_updated).isoformat(),
            "days_since_update": days_since(c.last_updated, now),
            "hours_ago": c.hours_ago,
            "tier": c.tier,
            "freshness_color": c.color,
        }
        for c in result.classified
    ]
    rows.sort(key=lambda r: r["hotel_count"], reverse=True)
    return {"suppliers": rows, "errors": [e.to_dict() for e in result.errors]}
