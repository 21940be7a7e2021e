from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from analytics_core.errors import InvalidThresholds

logger = logging.getLogger(__name__)

DEFAULT_FRESH_HOURS = 6.0
DEFAULT_STALE_HOURS = 24.0


@dataclass(frozen=True)
class FreshnessThresholds:
    fresh_hours: float = DEFAULT_FRESH_HOURS
    stale_hours: float = DEFAULT_STALE_HOURS

    def __post_init__(self) -> None:
        fresh, stale = validate_thresholds(self.fresh_hours, self.stale_hours)
        object.__setattr__(self, "fresh_hours", fresh)
        object.__setattr__(self, "stale_hours", stale)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_thresholds(fresh_hours: Any, stale_hours: Any) -> Tuple[float, float]:
    """Return the pair as floats, or raise ``InvalidThresholds``.

    Only real numbers are accepted; strings and booleans are rejected.
    """
    if not (_is_number(fresh_hours) and _is_number(stale_hours)):
        raise InvalidThresholds(fresh_hours, stale_hours)
    fresh = float(fresh_hours)
    stale = float(stale_hours)
    if not (math.isfinite(fresh) and math.isfinite(stale)):
        raise InvalidThresholds(fresh_hours, stale_hours)
    if fresh <= 0 or stale <= 0 or stale <= fresh:
        raise InvalidThresholds(fresh_hours, stale_hours)
    return fresh, stale


def _as_hours(raw: Mapping[str, Any], keys: tuple, default: float) -> float:
    for key in keys:
        if key not in raw or raw[key] is None:
            continue
        value = raw[key]
        try:
            if isinstance(value, bool):
                raise TypeError(value)
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric threshold %s=%r, using %s", key, value, default)
            return default
    return default


def normalize_thresholds(raw: Optional[Mapping[str, Any]]) -> FreshnessThresholds:
    """Build thresholds from loosely-typed input (API blocks, query params, widgets).

    Accepts both the wire names (``freshHours``/``staleHours``) and the
    snake_case field names. Missing or non-numeric values fall back to the
    6h/24h defaults; a numeric but inconsistent pair raises ``InvalidThresholds``.
    """
    raw = raw or {}
    fresh_hours = _as_hours(raw, ("fresh_hours", "freshHours"), DEFAULT_FRESH_HOURS)
    stale_hours = _as_hours(raw, ("stale_hours", "staleHours"), DEFAULT_STALE_HOURS)
    return FreshnessThresholds(fresh_hours=fresh_hours, stale_hours=stale_hours)
