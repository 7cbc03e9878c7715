"""Unit tests for the leave summary service and leave-day expansion."""

import datetime as dt
from unittest.mock import MagicMock

import pytest

from hr_portal.models.leave import LeaveRequest, expand_leave_days
from hr_portal.services.api_client import ApiError
from hr_portal.services.leave_service import LeaveService


def request(**overrides):
    data = {
        "leaveId": "l-1",
        "leaveCategoryType": "SICK",
        "fromDate": "2024-01-02",
        "toDate": "2024-01-03",
        "leaveDuration": 2,
        "status": "APPROVED",
    }
    data.update(overrides)
    return LeaveRequest.model_validate(data)


class TestExpandLeaveDays:
    """Test suite for expand_leave_days."""

    def test_one_day_per_covered_date(self):
        days = expand_leave_days([request()])

        assert [day.date for day in days] == [dt.date(2024, 1, 2), dt.date(2024, 1, 3)]
        assert all(day.leave_category == "SICK" for day in days)
        assert all(day.duration == 1.0 for day in days)

    def test_skips_unusable_requests(self):
        requests_ = [
            request(status="PENDING"),
            request(fromDate=None),
            request(leaveCategoryType="SABBATICAL"),
            request(fromDate="2024-01-05", toDate="2024-01-04"),
        ]

        assert expand_leave_days(requests_) == []


class TestLeaveService:
    """Test suite for LeaveService."""

    @pytest.fixture
    def api(self):
        return MagicMock()

    def test_leave_summary_params(self, api, envelopes):
        api.query.return_value = envelopes.ok({"content": [{"leaveId": "l-1", "status": "APPROVED"}]})

        requests_ = LeaveService(api).leave_summary("E-17", year=2024)

        api.query.assert_called_once_with(
            "/leave/view/summary",
            params={"employeeId": "E-17", "status": "APPROVED", "year": 2024, "page": 0, "size": 100},
            default_message="Failed to fetch leaves",
        )
        assert requests_[0].leave_id == "l-1"

    def test_status_none_fetches_all(self, api, envelopes):
        api.query.return_value = envelopes.ok([])

        LeaveService(api).leave_summary("E-17", status=None)

        assert "status" not in api.query.call_args.kwargs["params"]

    def test_requires_employee_id(self, api):
        with pytest.raises(ApiError):
            LeaveService(api).leave_summary("")
        api.query.assert_not_called()

    def test_approved_leave_days_filters_year(self, api, envelopes):
        api.query.return_value = envelopes.ok([
            {"leaveCategoryType": "PLANNED", "fromDate": "2024-12-31", "toDate": "2025-01-01",
             "leaveDuration": 2, "status": "APPROVED"},
        ])

        days = LeaveService(api).approved_leave_days("E-17", 2025)

        assert [day.date for day in days] == [dt.date(2025, 1, 1)]

    def test_approved_leave_days_reads_every_page(self, api, envelopes):
        pending = {"leaveCategoryType": "SICK", "fromDate": "2024-02-01", "toDate": "2024-02-01",
                   "leaveDuration": 1, "status": "PENDING"}
        first_page = [pending] * 99 + [
            {"leaveCategoryType": "SICK", "fromDate": "2024-01-02", "toDate": "2024-01-02",
             "leaveDuration": 1, "status": "APPROVED"},
        ]
        last_page = [
            {"leaveCategoryType": "PLANNED", "fromDate": "2024-03-04", "toDate": "2024-03-04",
             "leaveDuration": 1, "status": "APPROVED"},
        ]
        api.query.side_effect = [
            envelopes.ok({"content": first_page}),
            envelopes.ok({"content": last_page}),
        ]

        days = LeaveService(api).approved_leave_days("E-17", 2024)

        assert [day.date for day in days] == [dt.date(2024, 1, 2), dt.date(2024, 3, 4)]
        pages = [call.kwargs["params"]["page"] for call in api.query.call_args_list]
        assert pages == [0, 1]

    def test_all_leave_requests_stops_at_short_page(self, api, envelopes):
        api.query.side_effect = [
            envelopes.ok([{"leaveId": "l-1"}, {"leaveId": "l-2"}]),
            envelopes.ok([{"leaveId": "l-3"}]),
        ]

        requests_ = LeaveService(api).all_leave_requests("E-17", size=2)

        assert [r.leave_id for r in requests_] == ["l-1", "l-2", "l-3"]
        assert api.query.call_count == 2

    def test_failed_later_page_raises(self, api, envelopes):
        api.query.side_effect = [
            envelopes.ok([{"leaveId": "l-1"}, {"leaveId": "l-2"}]),
            ApiError("Failed to fetch leaves", status=503),
        ]

        with pytest.raises(ApiError):
            LeaveService(api).all_leave_requests("E-17", size=2)
