"""Save planning: diff the grid against known persisted ids.

``plan_save`` decides which cells to create, which to update and which to
leave alone; ``merge_created`` writes the ids of freshly created entries back
into the rows they came from.
"""

import datetime as dt
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from hr_portal.models.timesheet import CreatedTimesheet, TimesheetDraft
from hr_portal.register.grid import TaskRow
from hr_portal.utils.logging_utils import generate_correlation_id

logger = logging.getLogger(__name__)


@dataclass
class PendingCreate:
    """A cell without a backend id, to be created."""

    row_id: str
    day: dt.date
    draft: TimesheetDraft

    @property
    def client_ref(self) -> str:
        return self.draft.client_ref or ""


@dataclass
class PendingUpdate:
    """A persisted cell of a dirty row, to be updated."""

    timesheet_id: str
    row_id: str
    day: dt.date
    draft: TimesheetDraft


@dataclass
class SavePlan:
    """The backend calls a save needs.

    Attributes:
        creates: Cells to create, in one batch
        updates: Cells to update, one per timesheet id
        stale_ids: Persisted ids whose cell is no longer submitted (hours
            zeroed or task cleared); they are left on the backend
    """

    creates: List[PendingCreate] = field(default_factory=list)
    updates: List[PendingUpdate] = field(default_factory=list)
    stale_ids: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.creates and not self.updates


@dataclass
class SaveResult:
    """Outcome of a save.

    Attributes:
        ok: The create batch (if any) succeeded; failed updates do not clear it
        created: Number of entries the backend created
        updated_ids: Ids updated successfully
        failed_ids: Ids whose update failed; the next save retries them
        stale_ids: See ``SavePlan.stale_ids``
        refreshed: The week was re-fetched afterwards
    """

    ok: bool
    created: int = 0
    updated_ids: List[str] = field(default_factory=list)
    failed_ids: List[str] = field(default_factory=list)
    stale_ids: List[str] = field(default_factory=list)
    refreshed: bool = False


def plan_save(
    rows: List[TaskRow], ref_factory: Callable[[], str] = generate_correlation_id
) -> SavePlan:
    """Decide the minimal set of creates and updates for ``rows``.

    For every cell with positive hours on a row with a task name:
    no id means create; an id on a dirty row means update (keyed by id so an
    id is never updated twice); an id on a clean row is skipped.

    Args:
        rows: The grid's rows
        ref_factory: Produces the client reference attached to each create

    Returns:
        SavePlan
    """
    plan = SavePlan()
    updates: Dict[str, PendingUpdate] = {}

    for row in rows:
        task_name = row.task_name.strip()

        for day in sorted(row.hours):
            hours = row.hours[day]
            timesheet_id = row.timesheet_ids.get(day)

            if not math.isfinite(hours) or hours <= 0 or not task_name:
                if timesheet_id:
                    plan.stale_ids.append(timesheet_id)
                continue

            if not timesheet_id:
                plan.creates.append(
                    PendingCreate(
                        row_id=row.row_id,
                        day=day,
                        draft=TimesheetDraft(
                            work_date=day,
                            hours_worked=hours,
                            task_name=task_name,
                            client_ref=ref_factory(),
                        ),
                    )
                )
            elif row.dirty and timesheet_id not in updates:
                updates[timesheet_id] = PendingUpdate(
                    timesheet_id=timesheet_id,
                    row_id=row.row_id,
                    day=day,
                    draft=TimesheetDraft(
                        work_date=day,
                        hours_worked=hours,
                        task_name=task_name,
                        timesheet_id=timesheet_id,
                    ),
                )

    plan.updates = list(updates.values())

    if plan.stale_ids:
        logger.warning(
            f"{len(plan.stale_ids)} persisted cell(s) zeroed or untitled locally "
            f"will keep their backend values: {plan.stale_ids}"
        )
    logger.debug(f"Save plan: {len(plan.creates)} create(s), {len(plan.updates)} update(s)")
    return plan


def merge_created(
    rows: List[TaskRow],
    creates: List[PendingCreate],
    created: List[CreatedTimesheet],
) -> int:
    """Attach the ids of created entries to the cells they came from.

    Items are matched on the echoed ``client_ref``. An item without a
    reference falls back to (task name, work date), used only when exactly
    one pending create matches.

    Returns:
        Number of ids merged
    """
    rows_by_id = {row.row_id: row for row in rows}
    by_ref = {pending.client_ref: pending for pending in creates if pending.client_ref}
    unmatched = list(creates)
    merged = 0

    for item in created:
        if not item.timesheet_id:
            continue

        pending = by_ref.get(item.client_ref) if item.client_ref else None
        if pending is None:
            candidates = [
                candidate
                for candidate in unmatched
                if candidate.draft.task_name == item.task_name
                and candidate.day == item.work_date
            ]
            if len(candidates) != 1:
                logger.warning(
                    f"Cannot attribute created entry {item.timesheet_id} "
                    f"({item.task_name}, {item.work_date}): "
                    f"{len(candidates)} candidate cell(s)"
                )
                continue
            pending = candidates[0]

        if pending in unmatched:
            unmatched.remove(pending)

        row = rows_by_id.get(pending.row_id)
        if row is None:
            continue
        row.timesheet_ids[pending.day] = item.timesheet_id
        merged += 1

    return merged
