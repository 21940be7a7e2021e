from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from analytics_core.errors import AnalyticsError
from analytics_core.formatting import TimestampLike
from analytics_core.metrics_activity import compute_activity
from analytics_core.metrics_freshness import compute_platform_suppliers
from analytics_core.metrics_packages import compute_packages
from analytics_core.schemas import DashboardResponseModel, parse_payload
from analytics_core.thresholds import FreshnessThresholds

logger = logging.getLogger(__name__)

EMPTY_SECTIONS: Dict[str, Callable[[], Dict[str, Any]]] = {
    "suppliers": lambda: {"suppliers": [], "errors": []},
    "activity": lambda: {
        "rows": [],
        "series": [],
        "totals": {},
        "errors": [],
        "charts": {},
    },
    "packages": lambda: {"packages": [], "errors": []},
}


def _section(name: str, build: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    try:
        return build()
    except AnalyticsError:
        logger.exception("overview section %s failed", name)
        return EMPTY_SECTIONS[name]()


def compute_overview(
    payload: Union[DashboardResponseModel, Mapping[str, Any], None],
    *,
    now: TimestampLike,
    thresholds: Optional[FreshnessThresholds] = None,
) -> Dict[str, Any]:
    """Every chart payload for the dashboard landing page from one ``/dashboard/new-user`` response."""
    model = parse_payload(DashboardResponseModel, payload)
    return {
        "suppliers": _section("suppliers", lambda: compute_platform_suppliers(model, now=now, thresholds=thresholds)),
        "activity": _section("activity", lambda: compute_activity(model)),
        "packages": _section("packages", lambda: compute_packages(model)),
    }
