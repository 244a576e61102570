"""
services/stats.py
-----------------
Monthly and dashboard aggregates derived from stored records.

Pure functions: the reference time is always an argument, and a record
whose date cannot be parsed simply falls outside every month.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from models._dates import to_datetime
from models.expense import Expense
from models.income import Income
from models.task import Task

DEFAULT_MONTHLY_BUDGET = 5000.0


def budget_used_percent(spent: float, budget: float) -> float:
    """Share of ``budget`` consumed by ``spent``, in percent with one decimal."""
    if budget <= 0:
        return 0.0
    return round(spent / budget * 100, 1)


def completion_rate(tasks: Iterable[Task]) -> float:
    """Fraction of tasks completed; 0 for an empty collection."""
    tasks = list(tasks)
    if not tasks:
        return 0.0
    return sum(1 for t in tasks if t.completed) / len(tasks)


def in_month(value: Any, year: int, month: int) -> bool:
    dt = to_datetime(value)
    return dt is not None and dt.year == year and dt.month == month


@dataclass
class MonthlySummary:
    year: int
    month: int
    monthly_income: float
    monthly_expenses: float
    monthly_budget: float

    @property
    def savings(self) -> float:
        return self.monthly_income - self.monthly_expenses

    @property
    def budget_used_percent(self) -> float:
        return budget_used_percent(self.monthly_expenses, self.monthly_budget)

    @property
    def budget_remaining(self) -> float:
        return self.monthly_budget - self.monthly_expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "monthlyIncome": self.monthly_income,
            "monthlyExpenses": self.monthly_expenses,
            "monthlySavings": self.savings,
            "monthlyBudget": self.monthly_budget,
            "budgetUsedPercent": self.budget_used_percent,
            "budgetRemaining": self.budget_remaining,
        }


def monthly_summary(
    expenses: Iterable[Expense],
    incomes: Iterable[Income],
    now: Optional[datetime] = None,
    monthly_budget: float = DEFAULT_MONTHLY_BUDGET,
) -> MonthlySummary:
    """
    Sum the expenses and incomes dated in the calendar month of ``now``.

    Args:
        expenses: Expense records (any order).
        incomes: Income records (any order).
        now: Reference time; defaults to the current local time.
        monthly_budget: Budget the month's expenses are measured against.
    """
    now = now or datetime.now()
    y, m = now.year, now.month
    return MonthlySummary(
        year=y,
        month=m,
        monthly_income=sum(i.amount for i in incomes if in_month(i.date, y, m)),
        monthly_expenses=sum(e.amount for e in expenses if in_month(e.date, y, m)),
        monthly_budget=monthly_budget,
    )


@dataclass
class DashboardStats:
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    total_expenses: float
    monthly_budget: float

    @property
    def active_tasks(self) -> int:
        return self.total_tasks - self.completed_tasks

    @property
    def budget_used_percent(self) -> float:
        return budget_used_percent(self.total_expenses, self.monthly_budget)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "activeTasks": self.active_tasks,
            "completionRate": self.completion_rate,
            "totalExpenses": self.total_expenses,
            "monthlyBudget": self.monthly_budget,
            "budgetUsed": self.budget_used_percent,
        }


def dashboard_stats(
    tasks: Iterable[Task],
    expenses: Iterable[Expense],
    monthly_budget: float = DEFAULT_MONTHLY_BUDGET,
) -> DashboardStats:
    """Headline numbers for the dashboard cards (expenses are all-time)."""
    tasks = list(tasks)
    return DashboardStats(
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.completed),
        completion_rate=completion_rate(tasks),
        total_expenses=sum(e.amount for e in expenses),
        monthly_budget=monthly_budget,
    )
