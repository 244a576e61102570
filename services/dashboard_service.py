"""
services/dashboard_service.py
------------------------------
Read-only dashboard views computed from the store on every call.
No caching: each request sees the records as they are now.
"""

from datetime import datetime
from typing import Optional

from config import MONTHLY_BUDGET
from repositories.expense_repo import ExpenseRepository
from repositories.income_repo import IncomeRepository
from repositories.task_repo import TaskRepository
from services.stats import DashboardStats, MonthlySummary, dashboard_stats, monthly_summary
from services.views import ALL, Transaction, transaction_view


class DashboardService:
    """Combines the three repositories with the pure view functions."""

    def __init__(
        self,
        task_repo: Optional[TaskRepository] = None,
        expense_repo: Optional[ExpenseRepository] = None,
        income_repo: Optional[IncomeRepository] = None,
        monthly_budget: float = MONTHLY_BUDGET,
    ):
        self.task_repo = task_repo or TaskRepository()
        self.expense_repo = expense_repo or ExpenseRepository()
        self.income_repo = income_repo or IncomeRepository()
        self.monthly_budget = monthly_budget

    def transactions(self, category: str = ALL, search: str = "") -> list[Transaction]:
        return transaction_view(
            self.expense_repo.get_all(), self.income_repo.get_all(), category, search
        )

    def monthly(self, now: Optional[datetime] = None) -> MonthlySummary:
        return monthly_summary(
            self.expense_repo.get_all(),
            self.income_repo.get_all(),
            now=now,
            monthly_budget=self.monthly_budget,
        )

    def stats(self) -> DashboardStats:
        return dashboard_stats(
            self.task_repo.get_all(), self.expense_repo.get_all(), self.monthly_budget
        )
