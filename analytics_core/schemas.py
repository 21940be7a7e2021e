from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from analytics_core.freshness import SupplierSnapshot
from analytics_core.series import TimePoint

M = TypeVar("M", bound=BaseModel)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _empty_if_none(value: Any, empty: Any) -> Any:
    return empty if value is None else value


def parse_payload(model: Type[M], payload: Union[M, Mapping[str, Any], None]) -> M:
    """Validate a raw API payload, passing already-validated models through."""
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload or {})


# ---------------- /dashboard/supplier-freshness ----------------
class ThresholdsModel(WireModel):
    fresh_hours: Optional[float] = Field(default=None, alias="freshHours")
    stale_hours: Optional[float] = Field(default=None, alias="staleHours")

    def to_raw(self) -> Dict[str, float]:
        return self.model_dump(exclude_none=True)


class SupplierFreshnessModel(WireModel):
    supplier: str = Field(min_length=1)
    # Left unparsed so a bad value fails only this supplier's classification.
    last_updated: Any = Field(default=None, alias="lastUpdated")
    record_count: int = Field(default=0, ge=0, alias="recordCount")
    error_count: Optional[int] = Field(default=0, ge=0, alias="errorCount")

    def to_snapshot(self) -> SupplierSnapshot:
        return SupplierSnapshot(
            name=self.supplier,
            last_updated=self.last_updated,
            record_count=self.record_count,
            error_count=self.error_count or 0,
        )


class FreshnessSummaryModel(WireModel):
    last_global_update: Optional[str] = Field(default=None, alias="lastGlobalUpdate")


class SupplierFreshnessResponseModel(WireModel):
    suppliers: List[SupplierFreshnessModel] = Field(default_factory=list)
    summary: Optional[FreshnessSummaryModel] = None
    thresholds: Optional[ThresholdsModel] = None

    @field_validator("suppliers", mode="before")
    @classmethod
    def none_as_empty_suppliers(cls, value: Any) -> Any:
        return _empty_if_none(value, [])


# ---------------- /dashboard/new-user ----------------
class TimePointModel(WireModel):
    date: Any = None
    value: Union[int, float]

    def to_point(self) -> TimePoint:
        return TimePoint(date=self.date, value=self.value)


class TimeSeriesBlock(WireModel):
    time_series: List[TimePointModel] = Field(default_factory=list)

    @field_validator("time_series", mode="before")
    @classmethod
    def none_as_empty_series(cls, value: Any) -> Any:
        return _empty_if_none(value, [])

    def points(self) -> List[TimePoint]:
        return [p.to_point() for p in self.time_series]


class UserLoginsModel(TimeSeriesBlock):
    total_count: int = 0
    last_login: Optional[str] = None


class ApiRequestsModel(TimeSeriesBlock):
    total_count: int = 0


class UserRegistrationsModel(TimeSeriesBlock):
    title: Optional[str] = None
    unit: Optional[str] = None
    data_type: Optional[str] = None


class SupplierModel(WireModel):
    name: str = Field(min_length=1)
    hotel_count: int = Field(default=0, ge=0)
    last_updated: Any = None

    def to_snapshot(self) -> SupplierSnapshot:
        return SupplierSnapshot(name=self.name, last_updated=self.last_updated, record_count=self.hotel_count)


class PackageModel(WireModel):
    type: str
    description: str = ""
    example_points: Any = None


class PlatformOverviewModel(WireModel):
    total_users: int = 0
    total_hotels: int = 0
    total_mappings: int = 0
    available_suppliers: List[SupplierModel] = Field(default_factory=list)
    available_packages: List[PackageModel] = Field(default_factory=list)

    @field_validator("available_suppliers", "available_packages", mode="before")
    @classmethod
    def none_as_empty_lists(cls, value: Any) -> Any:
        return _empty_if_none(value, [])


class ActivityMetricsModel(WireModel):
    user_logins: UserLoginsModel = Field(default_factory=UserLoginsModel)
    api_requests: ApiRequestsModel = Field(default_factory=ApiRequestsModel)

    @field_validator("user_logins", "api_requests", mode="before")
    @classmethod
    def none_as_empty_block(cls, value: Any) -> Any:
        return _empty_if_none(value, {})


class PlatformTrendsModel(WireModel):
    user_registrations: UserRegistrationsModel = Field(default_factory=UserRegistrationsModel)

    @field_validator("user_registrations", mode="before")
    @classmethod
    def none_as_empty_block(cls, value: Any) -> Any:
        return _empty_if_none(value, {})


class DashboardResponseModel(WireModel):
    platform_overview: PlatformOverviewModel = Field(default_factory=PlatformOverviewModel)
    activity_metrics: ActivityMetricsModel = Field(default_factory=ActivityMetricsModel)
    platform_trends: PlatformTrendsModel = Field(default_factory=PlatformTrendsModel)

    @field_validator("platform_overview", "activity_metrics", "platform_trends", mode="before")
    @classmethod
    def none_as_empty_block(cls, value: Any) -> Any:
        return _empty_if_none(value, {})
