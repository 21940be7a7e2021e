import pytest
from pydantic import ValidationError

from analytics_core.freshness import SupplierSnapshot
from analytics_core.schemas import (
    DashboardResponseModel,
    SupplierFreshnessResponseModel,
    parse_payload,
)
from analytics_core.series import TimePoint


def test_supplier_freshness_payload_uses_wire_names():
    model = SupplierFreshnessResponseModel.model_validate(
        {
            "suppliers": [
                {"supplier": "Expedia", "lastUpdated": "2024-06-01T10:00:00Z", "recordCount": 15420, "errorCount": 0},
                {"supplier": "Agoda", "lastUpdated": "2024-06-01T02:00:00Z", "recordCount": 18750, "status": "stale"},
                {"supplier": "Restel", "lastUpdated": "2024-05-31T04:00:00Z", "recordCount": 8900, "errorCount": None},
            ],
            "thresholds": {"freshHours": 6, "staleHours": 24},
        }
    )
    snapshots = [s.to_snapshot() for s in model.suppliers]
    assert snapshots[0] == SupplierSnapshot("Expedia", "2024-06-01T10:00:00Z", 15420, 0)
    assert snapshots[1].error_count == 0
    assert snapshots[2].error_count == 0
    assert model.thresholds.to_raw() == {"fresh_hours": 6.0, "stale_hours": 24.0}


def test_malformed_timestamp_is_left_for_the_classifier():
    model = SupplierFreshnessResponseModel.model_validate(
        {"suppliers": [{"supplier": "Broken", "lastUpdated": "garbage", "recordCount": 1}]}
    )
    assert model.suppliers[0].to_snapshot().last_updated == "garbage"


def test_negative_record_count_is_rejected():
    with pytest.raises(ValidationError):
        SupplierFreshnessResponseModel.model_validate(
            {"suppliers": [{"supplier": "Expedia", "lastUpdated": "2024-06-01", "recordCount": -1}]}
        )


def test_empty_supplier_name_is_rejected():
    with pytest.raises(ValidationError):
        SupplierFreshnessResponseModel.model_validate({"suppliers": [{"supplier": "", "recordCount": 1}]})


def test_dashboard_payload_tolerates_missing_and_null_blocks():
    model = DashboardResponseModel.model_validate(
        {
            "platform_overview": None,
            "activity_metrics": {"user_logins": {"total_count": 3, "time_series": None}},
        }
    )
    assert model.platform_overview.available_suppliers == []
    assert model.activity_metrics.user_logins.total_count == 3
    assert model.activity_metrics.user_logins.points() == []
    assert model.activity_metrics.api_requests.points() == []
    assert model.platform_trends.user_registrations.points() == []


def test_time_points_keep_integer_values():
    model = DashboardResponseModel.model_validate(
        {"platform_trends": {"user_registrations": {"time_series": [{"date": "2024-01-01", "value": 0}]}}}
    )
    points = model.platform_trends.user_registrations.points()
    assert points == [TimePoint(date="2024-01-01", value=0)]
    assert isinstance(points[0].value, int)


def test_platform_supplier_maps_hotel_count_to_record_count():
    model = DashboardResponseModel.model_validate(
        {"platform_overview": {"available_suppliers": [{"name": "Agoda", "hotel_count": 120, "last_updated": "2024-01-01"}]}}
    )
    assert model.platform_overview.available_suppliers[0].to_snapshot() == SupplierSnapshot("Agoda", "2024-01-01", 120, 0)


def test_parse_payload_passes_models_through():
    model = DashboardResponseModel()
    assert parse_payload(DashboardResponseModel, model) is model
    assert parse_payload(DashboardResponseModel, None) == DashboardResponseModel()
