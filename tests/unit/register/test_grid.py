"""Unit tests for building the week grid from persisted entries."""

import datetime as dt

from hr_portal.register.grid import (
    UNTITLED_TASK,
    TaskRow,
    WeekGrid,
    build_week_grid,
    is_week_locked,
)

MON = dt.date(2024, 1, 1)
TUE = dt.date(2024, 1, 2)
WED = dt.date(2024, 1, 3)


class TestBuildWeekGrid:
    """Test suite for build_week_grid."""

    def test_empty_week_gives_one_zeroed_row(self, week):
        """With no entries there is exactly one row with all 7 dates zeroed."""
        grid = build_week_grid([], week)

        assert len(grid.rows) == 1
        row = grid.rows[0]
        assert sorted(row.hours) == week.dates
        assert all(value == 0 for value in row.hours.values())
        assert row.timesheet_ids == {}
        assert row.task_name == ""
        assert grid.locked is False

    def test_groups_entries_by_task_name(self, week, make_record):
        records = [
            make_record("ts-1", "2024-01-01", 8, task="Build"),
            make_record("ts-2", "2024-01-02", 6, task="Review"),
            make_record("ts-3", "2024-01-02", 2, task="Build"),
        ]

        grid = build_week_grid(records, week)

        assert [row.task_name for row in grid.rows] == ["Build", "Review"]
        build = grid.rows[0]
        assert build.hours == {MON: 8.0, TUE: 2.0}
        assert build.timesheet_ids == {MON: "ts-1", TUE: "ts-3"}
        assert build.dirty is False

    def test_blank_task_becomes_untitled(self, week, make_record):
        grid = build_week_grid([make_record("ts-1", "2024-01-01", 4, task="  ")], week)

        assert grid.rows[0].task_name == UNTITLED_TASK

    def test_entry_without_id_has_hours_but_no_id(self, week, make_record):
        grid = build_week_grid([make_record(None, "2024-01-01", 4)], week)

        assert grid.rows[0].hours == {MON: 4.0}
        assert grid.rows[0].timesheet_ids == {}

    def test_entries_outside_week_are_ignored(self, week, make_record):
        records = [
            make_record("ts-1", "2024-01-01", 8),
            make_record("ts-9", "2024-01-08", 8, task="Later"),
        ]

        grid = build_week_grid(records, week)

        assert [row.task_name for row in grid.rows] == ["Build"]

    def test_duplicate_task_date_keeps_last(self, week, make_record):
        records = [
            make_record("ts-1", "2024-01-01", 3),
            make_record("ts-2", "2024-01-01", 5),
        ]

        grid = build_week_grid(records, week)

        assert grid.rows[0].hours[MON] == 5.0
        assert grid.rows[0].timesheet_ids[MON] == "ts-2"


class TestWeekLock:
    """The lock flag follows the statuses of every fetched entry."""

    def test_all_submitted_locks(self, week, make_record):
        records = [
            make_record("ts-1", "2024-01-01", 8, status="Submitted"),
            make_record("ts-2", "2024-01-02", 8, status="Submitted"),
        ]

        assert is_week_locked(records) is True
        assert build_week_grid(records, week).locked is True

    def test_any_other_status_unlocks(self, week, make_record):
        records = [
            make_record("ts-1", "2024-01-01", 8, status="Submitted"),
            make_record("ts-2", "2024-01-02", 8, status="Draft"),
        ]

        assert is_week_locked(records) is False
        assert build_week_grid(records, week).locked is False

    def test_empty_list_is_unlocked(self):
        assert is_week_locked([]) is False

    def test_approved_entries_do_not_lock(self, make_record):
        records = [make_record("ts-1", "2024-01-01", 8, status="Approved")]

        assert is_week_locked(records) is False


class TestWeekGrid:
    """Totals and display matrix."""

    def test_unset_dates_count_as_zero(self, week):
        grid = WeekGrid(
            week=week,
            rows=[
                TaskRow(task_name="Build", hours={MON: 8.0}),
                TaskRow(task_name="Review", hours={MON: 1.5, WED: 2.0}),
            ],
        )

        totals = grid.day_totals()

        assert totals[MON] == 9.5
        assert totals[TUE] == 0
        assert totals[WED] == 2.0
        assert grid.total_hours() == 11.5

    def test_submittable_ids_need_positive_hours(self, week):
        grid = WeekGrid(
            week=week,
            rows=[
                TaskRow(
                    task_name="Build",
                    hours={MON: 8.0, TUE: 0.0},
                    timesheet_ids={MON: "ts-1", TUE: "ts-2"},
                ),
                TaskRow(task_name="Draft", hours={WED: 4.0}),
            ],
        )

        assert grid.submittable_ids() == ["ts-1"]

    def test_to_dataframe(self, week):
        grid = WeekGrid(
            week=week,
            rows=[
                TaskRow(task_name="Build", hours={MON: 8.0, TUE: 7.5}),
                TaskRow(task_name="Review", hours={TUE: 0.5}),
            ],
        )

        df = grid.to_dataframe()

        assert list(df.columns) == ["Task"] + [d.isoformat() for d in week.dates] + ["Total"]
        assert list(df["Task"]) == ["Build", "Review", "Total"]
        assert df.loc[0, "Total"] == 15.5
        assert df.loc[2, "2024-01-02"] == 8.0
        assert df.loc[2, "Total"] == 16.0


class TestTaskRow:
    def test_copy_is_independent(self):
        row = TaskRow(task_name="Build", hours={MON: 8.0}, timesheet_ids={MON: "ts-1"})

        clone = row.copy()
        clone.hours[MON] = 1.0
        del clone.timesheet_ids[MON]

        assert row.hours[MON] == 8.0
        assert row.timesheet_ids == {MON: "ts-1"}
        assert clone.row_id == row.row_id

    def test_has_hours_and_total(self):
        row = TaskRow.empty([MON, TUE])
        assert not row.has_hours
        row.hours[TUE] = 2.5
        assert row.has_hours
        assert row.total_hours == 2.5

    def test_persisted_ids_in_date_order(self):
        row = TaskRow(timesheet_ids={WED: "ts-3", MON: "ts-1"})
        assert row.persisted_ids == ["ts-1", "ts-3"]
