"""
services/expense_service.py
----------------------------
Business logic for managing expenses.
Validates payloads and orchestrates the ExpenseRepository.
"""

from typing import Any, Optional

from models._dates import utcnow
from models.expense import Expense
from repositories.expense_repo import ExpenseRepository
from schemas import ExpenseCreate, ExpenseUpdate, parse_payload
from utils.errors import NotFound
from utils.logger import get_logger

logger = get_logger(__name__)


class ExpenseService:
    """Handles all business logic related to expenses."""

    def __init__(self, repo: Optional[ExpenseRepository] = None):
        self.repo = repo or ExpenseRepository()

    def list_expenses(self, category: Optional[str] = None, search: Optional[str] = None) -> dict:
        """
        Expenses matching the optional filters, newest first, with their total.

        Returns:
            Dict with 'expenses' (list of Expense) and 'total' (float).
        """
        expenses = self.repo.get_all(category=category, search=search)
        return {"expenses": expenses, "total": sum(e.amount for e in expenses)}

    def get_expense(self, expense_id: str) -> Expense:
        expense = self.repo.get_by_id(expense_id)
        if expense is None:
            raise NotFound("Expense", expense_id)
        return expense

    def create_expense(self, data: Any) -> Expense:
        payload = parse_payload(ExpenseCreate, data)
        expense = Expense(
            description=payload.description,
            amount=payload.amount,
            category=payload.category,
            date=payload.date or utcnow(),
            payment_method=payload.payment_method,
            status=payload.status,
            notes=payload.notes,
        )
        return self.repo.add(expense)

    def update_expense(self, expense_id: str, data: Any) -> Expense:
        """Apply a partial update; only fields present in ``data`` change."""
        payload = parse_payload(ExpenseUpdate, data)
        expense = self.get_expense(expense_id)

        changes = payload.model_dump(exclude_unset=True)
        for name, value in changes.items():
            setattr(expense, name, value)
        if expense.date is None:
            expense.date = utcnow()

        if not self.repo.update(expense):
            raise NotFound("Expense", expense_id)
        logger.info(f"Updated expense #{expense_id}: {', '.join(sorted(changes))}")
        return expense

    def delete_expense(self, expense_id: str) -> None:
        if not self.repo.delete(expense_id):
            raise NotFound("Expense", expense_id)

    def get_category_stats(self) -> list[dict]:
        """Total and count per category, largest total first."""
        return self.repo.get_category_summary()
