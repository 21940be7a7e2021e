from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Union

from analytics_core.errors import error_record
from analytics_core.formatting import format_magnitude, title_case
from analytics_core.schemas import DashboardResponseModel, parse_payload

logger = logging.getLogger(__name__)


def _as_points(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"invalid points value: {value!r}")
    if isinstance(value, str):
        return int(value.strip())
    return int(value)


def compute_packages(payload: Union[DashboardResponseModel, Mapping[str, Any], None]) -> Dict[str, Any]:
    model = parse_payload(DashboardResponseModel, payload)
    rows: List[Dict[str, Any]] = []
    errors: List[Dict[str, Any]] = []
    for package in model.platform_overview.available_packages:
        try:
            points = _as_points(package.example_points)
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping package %r: %s", package.type, exc)
            errors.append(error_record("package", package.type, exc))
            continue
        rows.append(
            {
                "type": title_case(package.type),
                "description": package.description,
                "points": points,
                "formatted_points": format_magnitude(points),
            }
        )
    rows.sort(key=lambda r: r["points"], reverse=True)
    return {"packages": rows, "errors": errors}
