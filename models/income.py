"""
models/income.py
----------------
Domain model for income entries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from models._dates import iso, to_datetime, utcnow


@dataclass
class Income:
    """An amount received from ``source`` on ``date``."""
    source: str
    amount: float
    date: Optional[datetime] = field(default_factory=utcnow)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "amount": self.amount,
            "date": iso(self.date),
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Income":
        return cls(
            id=data.get("id") or data.get("_id"),
            source=data.get("source", ""),
            amount=float(data.get("amount") or 0),
            date=to_datetime(data.get("date")),
            created_at=to_datetime(data.get("createdAt")),
            updated_at=to_datetime(data.get("updatedAt")),
        )

    def __str__(self) -> str:
        return f"+{self.amount:.2f} | {self.source} | {self.date}"
