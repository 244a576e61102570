"""
services/calendar_service.py
-----------------------------
Calendar features:
    - Push: copy every dated task into the external calendar as an all-day
      event and remember the returned event id on the task.
    - Feed: project tasks, expenses and incomes into display-only events.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from config import CALENDAR_SYNC_TIMEOUT_SECONDS
from gcalendar.google_calendar import GoogleCalendarClient
from models._dates import to_date
from models.expense import Expense
from models.income import Income
from models.task import Task
from repositories.expense_repo import ExpenseRepository
from repositories.income_repo import IncomeRepository
from repositories.task_repo import TaskRepository
from utils.errors import DashboardError, IntegrationFailure
from utils.logger import get_logger

logger = get_logger(__name__)

NO_DESCRIPTION = "No description"
EVENT_COLORS = {"task": "#2196f3", "expense": "#e53935", "income": "#43a047"}


# ── Mapping ───────────────────────────────────────────────

def _money(amount: float) -> str:
    return f"{amount:g}" if float(amount).is_integer() else f"{amount:.2f}"


def task_to_event(task: Task) -> Optional[dict]:
    """The all-day event a task becomes, or None if it has no due date."""
    if task.due_date is None:
        return None
    return {
        "summary": task.title,
        "description": task.description or NO_DESCRIPTION,
        "date": task.due_date,
    }


def calendar_feed(
    tasks: Iterable[Task], expenses: Iterable[Expense], incomes: Iterable[Income]
) -> list[dict]:
    """
    Display events for every dated record, colored by kind.
    Records without a usable date are left out.
    """
    events: list[dict] = []

    def add(title: str, when: Any, kind: str) -> None:
        day = to_date(when)
        if day is not None:
            events.append({"title": title, "start": day.isoformat(), "color": EVENT_COLORS[kind], "type": kind})

    for t in tasks:
        add(f"Task: {t.title}", t.due_date, "task")
    for e in expenses:
        add(f"Expense: {e.category} - ${_money(e.amount)}", e.date, "expense")
    for i in incomes:
        add(f"Income: {i.source} +${_money(i.amount)}", i.date, "income")
    return events


@dataclass
class SyncResult:
    synced: int
    skipped: int
    remaining: int

    @property
    def complete(self) -> bool:
        return self.remaining == 0

    @property
    def message(self) -> str:
        if self.complete:
            return "All tasks synced to Google Calendar"
        return (
            f"Calendar sync timed out: {self.synced} synced, "
            f"{self.remaining} not attempted"
        )

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "synced": self.synced,
            "skipped": self.skipped,
            "remaining": self.remaining,
            "complete": self.complete,
        }


# ── Service ───────────────────────────────────────────────

class CalendarService:
    """Pushes tasks to Google Calendar and builds the local event feed."""

    def __init__(
        self,
        task_repo: Optional[TaskRepository] = None,
        expense_repo: Optional[ExpenseRepository] = None,
        income_repo: Optional[IncomeRepository] = None,
        client_factory: Callable[[], GoogleCalendarClient] = GoogleCalendarClient.from_stored_token,
        timeout_seconds: float = CALENDAR_SYNC_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.task_repo = task_repo or TaskRepository()
        self.expense_repo = expense_repo or ExpenseRepository()
        self.income_repo = income_repo or IncomeRepository()
        self.client_factory = client_factory
        self.timeout_seconds = timeout_seconds
        self.clock = clock

    def sync_tasks(self) -> SyncResult:
        """
        Push every dated task, one at a time.

        A task already carrying an event id updates that event instead of
        creating a duplicate. The first failure stops the run; tasks pushed
        before it keep their event ids.

        Raises:
            CalendarAuthorizationError: If no stored credential is usable.
            IntegrationFailure: If a calendar call fails.
        """
        client = self.client_factory()
        tasks = self.task_repo.get_all()
        started = self.clock()
        synced = skipped = 0

        for index, task in enumerate(tasks):
            if self.clock() - started > self.timeout_seconds:
                result = SyncResult(synced, skipped, len(tasks) - index)
                logger.warning(result.message)
                return result

            event = task_to_event(task)
            if event is None:
                skipped += 1
                continue

            try:
                if task.external_event_id:
                    event_id = client.update_all_day_event(task.external_event_id, **_event_args(event))
                else:
                    event_id = client.create_all_day_event(**_event_args(event))
            except DashboardError:
                logger.error(f"Calendar sync aborted at task #{task.id} ({synced} synced)")
                raise
            except Exception as e:
                logger.error(f"Calendar sync aborted at task #{task.id} ({synced} synced): {e}")
                raise IntegrationFailure(str(e)) from e

            self.task_repo.set_external_event_id(task.id, event_id)
            task.external_event_id = event_id
            synced += 1

        logger.info(f"Calendar sync finished: {synced} synced, {skipped} without due date")
        return SyncResult(synced, skipped, 0)

    def events(self) -> list[dict]:
        return calendar_feed(
            self.task_repo.get_all(),
            self.expense_repo.get_all(),
            self.income_repo.get_all(),
        )


def _event_args(event: dict) -> dict:
    return {"summary": event["summary"], "description": event["description"], "day": event["date"]}
