"""Unit tests for the timesheet service."""

import datetime as dt
from unittest.mock import MagicMock

import pytest

from hr_portal.models.timesheet import CreatedTimesheet, TimesheetDraft
from hr_portal.services.api_client import ApiError
from hr_portal.services.timesheet_service import TimesheetService


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def service(api):
    return TimesheetService(api)


def draft(day=1, hours=8.0, ref="ref-1"):
    return TimesheetDraft(
        work_date=dt.date(2024, 1, day), hours_worked=hours, task_name="Build", client_ref=ref
    )


class TestTimesheetService:
    """Test suite for TimesheetService."""

    def test_list_timesheets_params_and_parsing(self, service, api, envelopes):
        api.query.return_value = envelopes.ok({
            "content": [
                {"timesheetId": 11, "workDate": "2024-01-01T00:00:00Z", "workedHours": 8,
                 "taskName": "Build", "status": "Draft"},
                {"timesheetId": "12", "workDate": None},
            ]
        })

        records = service.list_timesheets(dt.date(2024, 1, 1), dt.date(2024, 1, 7))

        api.query.assert_called_once_with(
            "/employee/view/timesheet",
            params={"startDate": "2024-01-01", "endDate": "2024-01-07"},
            default_message="Failed to fetch timesheets",
        )
        # The malformed second entry is skipped
        assert len(records) == 1
        assert records[0].timesheet_id == "11"
        assert records[0].work_date == dt.date(2024, 1, 1)
        assert records[0].hours_worked == 8.0

    def test_list_timesheets_accepts_bare_list(self, service, api, envelopes):
        api.query.return_value = envelopes.ok(
            [{"timesheetId": "1", "workDate": "2024-01-02", "workedHours": None}]
        )

        records = service.list_timesheets(page=0, size=20, order_by="workDate", direction="asc")

        assert records[0].hours_worked == 0.0
        assert api.query.call_args.kwargs["params"] == {
            "page": 0, "size": 20, "orderBy": "workDate", "direction": "asc",
        }

    def test_create_timesheets_sends_one_batch(self, service, api, envelopes):
        api.mutate.return_value = envelopes.ok([
            {"timesheetId": "ts-1", "workDate": "2024-01-01", "taskName": "Build", "clientRef": "ref-1"},
        ])

        envelope = service.create_timesheets([draft()])

        method, path = api.mutate.call_args.args
        assert (method, path) == ("POST", "/employee/timesheet/register")
        assert api.mutate.call_args.kwargs["json"] == [{
            "workDate": "2024-01-01",
            "hoursWorked": 8.0,
            "taskName": "Build",
            "taskDescription": "",
            "clientRef": "ref-1",
        }]
        assert envelope.response == [
            CreatedTimesheet(
                timesheet_id="ts-1", work_date=dt.date(2024, 1, 1),
                task_name="Build", client_ref="ref-1",
            )
        ]

    def test_create_with_no_drafts_makes_no_call(self, service, api):
        envelope = service.create_timesheets([])

        assert envelope.flag is False
        assert envelope.status == 400
        api.mutate.assert_not_called()

    def test_update_timesheet(self, service, api, envelopes):
        api.mutate.return_value = envelopes.ok()

        service.update_timesheet("ts-1", draft())

        method, path = api.mutate.call_args.args
        assert (method, path) == ("PUT", "/employee/timesheet/update")
        assert api.mutate.call_args.kwargs["params"] == {"timesheetIds": "ts-1"}
        assert len(api.mutate.call_args.kwargs["json"]) == 1

    def test_update_without_id(self, service, api):
        assert service.update_timesheet("", draft()).flag is False
        api.mutate.assert_not_called()

    def test_delete_timesheet(self, service, api, envelopes):
        api.mutate.return_value = envelopes.ok()

        service.delete_timesheet("ts-9")

        assert api.mutate.call_args.args == ("DELETE", "/employee/timesheet/delete")
        assert api.mutate.call_args.kwargs["params"] == {"timesheetId": "ts-9"}

    def test_submit_for_approval(self, service, api, envelopes):
        api.mutate.return_value = envelopes.ok()

        service.submit_for_approval(["ts-1", "", "ts-2"])

        assert api.mutate.call_args.args == ("GET", "/employee/timesheet/approvaltomanager")
        assert api.mutate.call_args.kwargs["params"] == {"timesheetIds": ["ts-1", "ts-2"]}

    def test_submit_nothing(self, service, api):
        envelope = service.submit_for_approval([])

        assert envelope.flag is False
        assert envelope.message == "No timesheet ids to submit"
        api.mutate.assert_not_called()

    def test_get_timesheet(self, service, api, envelopes):
        api.query.return_value = envelopes.ok({
            "timesheetId": 11, "workDate": "2024-01-02T00:00:00Z", "workedHours": 7.5,
            "taskName": "Build", "status": "Submitted",
        })

        record = service.get_timesheet("11")

        api.query.assert_called_once_with(
            "/employee/view/timesheet/11", default_message="Failed to fetch timesheet"
        )
        assert record.timesheet_id == "11"
        assert record.work_date == dt.date(2024, 1, 2)
        assert record.hours_worked == 7.5
        assert record.status == "Submitted"

    def test_get_timesheet_errors(self, service, api):
        with pytest.raises(ApiError):
            service.get_timesheet("")
        api.query.assert_not_called()

        api.query.side_effect = ApiError("Failed to fetch timesheet", status=404)
        with pytest.raises(ApiError) as exc_info:
            service.get_timesheet("404")
        assert exc_info.value.status == 404

    @pytest.mark.parametrize("hours", [-1, float("nan"), float("inf")])
    def test_draft_rejects_invalid_hours(self, hours):
        with pytest.raises(ValueError):
            draft(hours=hours)
