from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Sequence

import altair as alt
import pandas as pd

from analytics_core.formatting import title_case
from analytics_core.freshness import TIER_COLORS, TIERS, ClassifiedSupplier
from analytics_core.series import DATE_KEY
from analytics_core.thresholds import FreshnessThresholds

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def freshness_chart(classified: Sequence[ClassifiedSupplier], thresholds: FreshnessThresholds) -> alt.LayerChart:
    df = pd.DataFrame(
        [{"name": c.name, "hours_ago": round(c.hours_ago, 2), "tier": c.tier, "record_count": c.record_count} for c in classified],
        columns=["name", "hours_ago", "tier", "record_count"],
    )
    tier_scale = alt.Scale(domain=list(TIERS), range=[TIER_COLORS[t] for t in TIERS])
    hover = alt.selection_point(fields=["name"], on="mouseover", empty="all")
    bars = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("name:N", title="Supplier", sort=None, axis=alt.Axis(grid=False)),
            y=alt.Y("hours_ago:Q", title="Hours Since Update", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("tier:N", title="Status", scale=tier_scale),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.6)),
            tooltip=[
                alt.Tooltip("name:N", title="Supplier"),
                alt.Tooltip("hours_ago:Q", title="Hours Ago", format=".1f"),
                alt.Tooltip("tier:N", title="Status"),
                alt.Tooltip("record_count:Q", title="Records", format=","),
            ],
        )
        .add_params(hover)
    )
    cutoffs = pd.DataFrame(
        [
            {"hours": thresholds.fresh_hours, "tier": "stale"},
            {"hours": thresholds.stale_hours, "tier": "outdated"},
        ]
    )
    rules = (
        alt.Chart(cutoffs)
        .mark_rule(strokeDash=[4, 4])
        .encode(y="hours:Q", color=alt.Color("tier:N", scale=tier_scale, legend=None))
    )
    return (bars + rules).properties(height=260)


def activity_frame(rows: Iterable[Mapping[str, Any]], series_names: Sequence[str]) -> pd.DataFrame:
    """Long-form frame of reported points only; a missing key never becomes a zero."""
    records: List[Dict[str, Any]] = []
    for row in rows:
        for name in series_names:
            if name in row:
                records.append({DATE_KEY: row[DATE_KEY], "metric": title_case(name), "value": row[name]})
    return pd.DataFrame(records, columns=[DATE_KEY, "metric", "value"])


def activity_chart(rows: Iterable[Mapping[str, Any]], series_names: Sequence[str]) -> alt.Chart:
    long_df = activity_frame(rows, series_names)
    hover = alt.selection_point(fields=["metric"], on="mouseover", empty="all")
    return (
        alt.Chart(long_df)
        .mark_line(point={"filled": True, "size": 60})
        .encode(
            x=alt.X(f"{DATE_KEY}:T", title="Date", axis=alt.Axis(format="%b %d", grid=False)),
            y=alt.Y("value:Q", title="Count", axis=alt.Axis(format="~s", gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("metric:N", title="Metric"),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.2)),
            tooltip=[
                alt.Tooltip(f"{DATE_KEY}:T", title="Date"),
                alt.Tooltip("metric:N", title="Metric"),
                alt.Tooltip("value:Q", title="Count", format=","),
            ],
        )
        .add_params(hover)
        .properties(height=260)
    )
