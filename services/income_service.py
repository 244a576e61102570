"""
services/income_service.py
---------------------------
Business logic for income entries.
"""

from typing import Any, Optional

from models._dates import utcnow
from models.income import Income
from repositories.income_repo import IncomeRepository
from schemas import IncomeCreate, IncomeUpdate, parse_payload
from utils.errors import NotFound


class IncomeService:
    """CRUD orchestration for incomes."""

    def __init__(self, repo: Optional[IncomeRepository] = None):
        self.repo = repo or IncomeRepository()

    def list_incomes(self) -> list[Income]:
        return self.repo.get_all()

    def get_income(self, income_id: str) -> Income:
        income = self.repo.get_by_id(income_id)
        if income is None:
            raise NotFound("Income", income_id)
        return income

    def create_income(self, data: Any) -> Income:
        payload = parse_payload(IncomeCreate, data)
        income = Income(source=payload.source, amount=payload.amount, date=payload.date or utcnow())
        return self.repo.add(income)

    def update_income(self, income_id: str, data: Any) -> Income:
        payload = parse_payload(IncomeUpdate, data)
        income = self.get_income(income_id)
        for name, value in payload.model_dump(exclude_unset=True).items():
            setattr(income, name, value)
        if income.date is None:
            income.date = utcnow()
        if not self.repo.update(income):
            raise NotFound("Income", income_id)
        return income

    def delete_income(self, income_id: str) -> None:
        if not self.repo.delete(income_id):
            raise NotFound("Income", income_id)
