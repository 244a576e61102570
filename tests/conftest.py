"""Shared fixtures: in-memory repositories and a Flask app wired to them."""

from __future__ import annotations

import copy
import itertools
import sys
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models._dates import to_datetime  # noqa: E402

_EPOCH = datetime(2025, 1, 1, 9, 0, 0)


class _MemoryRepository:
    """Dict-backed stand-in for a psycopg2 repository."""

    prefix = "rec"

    def __init__(self):
        self.items: dict[str, object] = {}
        self._seq = itertools.count(1)

    def add(self, record):
        n = next(self._seq)
        record.id = f"{self.prefix}-{n}"
        record.created_at = record.updated_at = _EPOCH + timedelta(minutes=n)
        self.items[record.id] = copy.deepcopy(record)
        return record

    def _all(self):
        return [copy.deepcopy(r) for r in self.items.values()]

    def get_by_id(self, record_id):
        record = self.items.get(record_id)
        return copy.deepcopy(record) if record else None

    def update(self, record) -> bool:
        if record.id not in self.items:
            return False
        self.items[record.id] = copy.deepcopy(record)
        return True

    def delete(self, record_id) -> bool:
        return self.items.pop(record_id, None) is not None


class FakeTaskRepository(_MemoryRepository):
    prefix = "task"

    def get_all(self):
        return self._all()

    def set_external_event_id(self, task_id, event_id) -> bool:
        if task_id not in self.items:
            return False
        self.items[task_id].external_event_id = event_id
        return True


def _newest_first(records):
    return sorted(records, key=lambda r: to_datetime(r.date) or datetime.min, reverse=True)


class FakeExpenseRepository(_MemoryRepository):
    prefix = "exp"

    def get_all(self, category=None, search=None):
        rows = self._all()
        if category and category != "all":
            rows = [r for r in rows if r.category == category]
        if search:
            rows = [r for r in rows if search.lower() in r.description.lower()]
        return _newest_first(rows)

    def get_category_summary(self):
        totals: dict[str, dict] = {}
        for r in self._all():
            entry = totals.setdefault(r.category, {"category": r.category, "total": 0.0, "count": 0})
            entry["total"] += r.amount
            entry["count"] += 1
        return sorted(totals.values(), key=lambda e: -e["total"])


class FakeIncomeRepository(_MemoryRepository):
    prefix = "inc"

    def get_all(self):
        return _newest_first(self._all())


@pytest.fixture()
def repos():
    return SimpleNamespace(
        tasks=FakeTaskRepository(),
        expenses=FakeExpenseRepository(),
        incomes=FakeIncomeRepository(),
    )


class FakeCalendarClient:
    """Records calls; optionally fails on the Nth create."""

    def __init__(self, fail_on: int | None = None):
        self.created: list[dict] = []
        self.updated: list[dict] = []
        self.fail_on = fail_on

    def create_all_day_event(self, summary, description, day):
        if self.fail_on is not None and len(self.created) + 1 == self.fail_on:
            from utils.errors import IntegrationFailure
            raise IntegrationFailure("calendar unavailable")
        self.created.append({"summary": summary, "description": description, "day": day})
        return f"evt-{len(self.created)}"

    def update_all_day_event(self, event_id, summary, description, day):
        self.updated.append({"id": event_id, "summary": summary, "description": description, "day": day})
        return event_id


@pytest.fixture()
def calendar_client():
    return FakeCalendarClient()


@pytest.fixture()
def app(repos, calendar_client, monkeypatch):
    from handlers import ai_handler, calendar_handler, dashboard_handler
    from handlers import expense_handler, income_handler, task_handler
    from security import rate_limiter
    from server import create_app

    monkeypatch.setattr(task_handler.task_service, "repo", repos.tasks)
    monkeypatch.setattr(expense_handler.expense_service, "repo", repos.expenses)
    monkeypatch.setattr(income_handler.income_service, "repo", repos.incomes)

    insight = ai_handler.insight_service
    monkeypatch.setattr(insight, "task_repo", repos.tasks)
    monkeypatch.setattr(insight, "expense_repo", repos.expenses)

    cal = calendar_handler.calendar_service
    monkeypatch.setattr(cal, "task_repo", repos.tasks)
    monkeypatch.setattr(cal, "expense_repo", repos.expenses)
    monkeypatch.setattr(cal, "income_repo", repos.incomes)
    monkeypatch.setattr(cal, "client_factory", lambda: calendar_client)

    dash = dashboard_handler.dashboard_service
    monkeypatch.setattr(dash, "task_repo", repos.tasks)
    monkeypatch.setattr(dash, "expense_repo", repos.expenses)
    monkeypatch.setattr(dash, "income_repo", repos.incomes)
    monkeypatch.setattr(dash, "monthly_budget", 5000.0)

    rate_limiter.reset()
    flask_app = create_app(api_token="", cors_origins=["http://localhost:3000"])
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
