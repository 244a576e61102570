"""
client/dashboard.py
-------------------
Client-side interaction state and data loading.

The controller fetches raw records from the API and runs the same pure
view functions the server uses; nothing is cached between loads.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from client.api_client import ApiError, DashboardApi
from config import MONTHLY_BUDGET, TASKS_PER_PAGE
from models.expense import Expense
from models.income import Income
from models.task import Task
from services.stats import DashboardStats, MonthlySummary, dashboard_stats, monthly_summary
from services.views import ALL, Page, Transaction, task_view, transaction_view
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskViewState:
    """
    Selection state of the task list. Changing the filter, the search or the
    sort always goes back to the first page.
    """
    status: str = ALL
    search: str = ""
    sort_by: str = "createdAt"
    order: str = "desc"
    page: int = 1
    page_size: int = TASKS_PER_PAGE

    def with_status(self, status: str) -> "TaskViewState":
        return replace(self, status=status, page=1)

    def with_search(self, search: str) -> "TaskViewState":
        return replace(self, search=search, page=1)

    def with_sort(self, sort_by: str, order: Optional[str] = None) -> "TaskViewState":
        return replace(self, sort_by=sort_by, order=order or self.order, page=1)

    def with_page(self, page: int) -> "TaskViewState":
        return replace(self, page=max(1, page))

    def apply(self, tasks: list[Task]) -> Page:
        return task_view(
            tasks, self.status, self.search, self.sort_by, self.order, self.page, self.page_size
        )


@dataclass(frozen=True)
class TransactionFilter:
    category: str = ALL
    search: str = ""


@dataclass
class DashboardData:
    tasks: list[Task]
    expenses: list[Expense]
    incomes: list[Income] = field(default_factory=list)
    expense_total: float = 0.0


@dataclass
class LoadResult:
    """Either ``data`` or a user-facing ``error`` the UI can offer to retry."""
    data: Optional[DashboardData] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        return not self.ok


def _records(body: Any, name: str) -> list[dict]:
    if not isinstance(body, dict):
        raise TypeError(f"{name}: expected a JSON object, got {type(body).__name__}")
    rows = body.get("data") or []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise TypeError(f"{name}: 'data' must be a list of objects")
    return rows


def _decode(results: dict) -> DashboardData:
    """Build model objects from the raw API bodies; malformed input raises."""
    expenses_body = results["expenses"]
    return DashboardData(
        tasks=[Task.from_dict(d) for d in _records(results["tasks"], "tasks")],
        expenses=[Expense.from_dict(d) for d in _records(expenses_body, "expenses")],
        incomes=[Income.from_dict(d) for d in _records(results.get("incomes") or {}, "incomes")],
        expense_total=float(expenses_body.get("total") or 0),
    )


class DashboardController:
    """Loads records and derives every view the dashboard shows."""

    LOAD_ERROR = "Failed to load data. Make sure the server is running."

    def __init__(self, api: Optional[DashboardApi] = None, monthly_budget: float = MONTHLY_BUDGET):
        self.api = api or DashboardApi()
        self.monthly_budget = monthly_budget
        self.task_state = TaskViewState()
        self.transaction_filter = TransactionFilter()

    def load(self, include_incomes: bool = False) -> LoadResult:
        """
        Fetch tasks and expenses (and optionally incomes) concurrently.
        If any fetch fails the whole load fails.
        """
        calls = {"tasks": self.api.get_tasks, "expenses": self.api.get_expenses}
        if include_incomes:
            calls["incomes"] = self.api.get_incomes

        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures = {name: pool.submit(call) for name, call in calls.items()}
            try:
                results = {name: f.result() for name, f in futures.items()}
            except ApiError as e:
                logger.error(f"Error fetching data: {e.message}")
                return LoadResult(error=self.LOAD_ERROR)

        try:
            data = _decode(results)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error decoding dashboard data: {e}")
            return LoadResult(error=self.LOAD_ERROR)
        return LoadResult(data=data)

    # ── Derived views ─────────────────────────────────────

    def task_page(self, data: DashboardData) -> Page:
        return self.task_state.apply(data.tasks)

    def stats(self, data: DashboardData) -> DashboardStats:
        return dashboard_stats(data.tasks, data.expenses, self.monthly_budget)

    def monthly(self, data: DashboardData, now: Optional[datetime] = None) -> MonthlySummary:
        return monthly_summary(data.expenses, data.incomes, now=now, monthly_budget=self.monthly_budget)

    def transactions(self, data: DashboardData) -> list[Transaction]:
        f = self.transaction_filter
        return transaction_view(data.expenses, data.incomes, f.category, f.search)
