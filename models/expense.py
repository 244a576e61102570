"""
models/expense.py
-----------------
Domain model for expenses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from models._dates import iso, to_datetime, utcnow

EXPENSE_CATEGORIES = (
    "Food", "Transport", "Entertainment", "Utilities", "Healthcare", "Shopping",
    "Education", "Software", "Office", "Marketing", "Operations", "Other",
)
PAYMENT_METHODS = ("Cash", "Credit Card", "Debit Card", "Bank Transfer", "Other")
EXPENSE_STATUSES = ("Paid", "Pending", "Cancelled")


@dataclass
class Expense:
    """
    Represents a single expense.

    Attributes:
        id: Store-assigned opaque identifier (None for new records).
        description: What the money was spent on.
        amount: Non-negative amount.
        category: One of EXPENSE_CATEGORIES.
        date: When the expense happened (defaults to creation time).
        payment_method: One of PAYMENT_METHODS.
        status: One of EXPENSE_STATUSES.
        notes: Optional free text.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    description: str
    amount: float
    category: str = "Other"
    date: Optional[datetime] = field(default_factory=utcnow)
    payment_method: str = "Cash"
    status: str = "Paid"
    notes: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "category": self.category,
            "date": iso(self.date),
            "paymentMethod": self.payment_method,
            "status": self.status,
            "notes": self.notes,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        return cls(
            id=data.get("id") or data.get("_id"),
            description=data.get("description", ""),
            amount=float(data.get("amount") or 0),
            category=data.get("category") or "Other",
            date=to_datetime(data.get("date")),
            payment_method=data.get("paymentMethod") or "Cash",
            status=data.get("status") or "Paid",
            notes=data.get("notes"),
            created_at=to_datetime(data.get("createdAt")),
            updated_at=to_datetime(data.get("updatedAt")),
        )

    def __str__(self) -> str:
        return f"-{self.amount:.2f} | {self.category} | {self.description} | {self.date}"
