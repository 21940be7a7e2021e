from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from analytics_core.charts import activity_chart, to_vega_spec
from analytics_core.formatting import format_chart_date, format_magnitude, title_case
from analytics_core.schemas import DashboardResponseModel, parse_payload
from analytics_core.series import DATE_KEY, TimePoint, align_series

SERIES_KEYS = ("registrations", "logins", "api_requests")


def extract_series(model: DashboardResponseModel) -> Dict[str, List[TimePoint]]:
    return {
        "registrations": model.platform_trends.user_registrations.points(),
        "logins": model.activity_metrics.user_logins.points(),
        "api_requests": model.activity_metrics.api_requests.points(),
    }


def compute_activity(payload: Union[DashboardResponseModel, Mapping[str, Any], None]) -> Dict[str, Any]:
    model = parse_payload(DashboardResponseModel, payload)
    series = extract_series(model)
    aligned = align_series(series)

    rows = [{**row, "label": format_chart_date(row[DATE_KEY])} for row in aligned.rows]
    failed = set(aligned.failed_series)
    plotted = [key for key in SERIES_KEYS if key not in failed]

    logins = model.activity_metrics.user_logins
    api_requests = model.activity_metrics.api_requests
    charts: Dict[str, Any] = {}
    if rows:
        charts["activity"] = to_vega_spec(activity_chart(rows, plotted))

    return {
        "rows": rows,
        "series": [
            {"key": key, "label": title_case(key), "points": 0 if key in failed else len(series[key])}
            for key in SERIES_KEYS
        ],
        "totals": {
            "logins": {"total_count": logins.total_count, "formatted": format_magnitude(logins.total_count)},
            "api_requests": {"total_count": api_requests.total_count, "formatted": format_magnitude(api_requests.total_count)},
            "last_login": logins.last_login,
        },
        "errors": [e.to_dict() for e in aligned.errors],
        "charts": charts,
    }
