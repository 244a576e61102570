"""
schemas/payloads.py
-------------------
Create/update payloads for tasks, expenses and incomes.

Field names arrive in camelCase (``dueDate``, ``paymentMethod``); strings
are trimmed; dates are parsed leniently and an empty string means "not set".
"""

from datetime import date, datetime
from typing import Any, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from models._dates import to_date, to_datetime
from utils.errors import ValidationFailure

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]
ExpenseCategory = Literal[
    "Food", "Transport", "Entertainment", "Utilities", "Healthcare", "Shopping",
    "Education", "Software", "Office", "Marketing", "Operations", "Other",
]
PaymentMethod = Literal["Cash", "Credit Card", "Debit Card", "Bank Transfer", "Other"]
ExpenseStatus = Literal["Paid", "Pending", "Cancelled"]

P = TypeVar("P", bound=BaseModel)


def _lenient_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        parsed = to_date(value)
        if parsed is None:
            raise ValueError(f"'{value}' is not a valid date")
        return parsed
    return value


def _lenient_datetime(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, (str, date)) and not isinstance(value, datetime):
        parsed = to_datetime(value)
        if parsed is None:
            raise ValueError(f"'{value}' is not a valid date")
        return parsed
    return value


def _not_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


# ── Tasks ─────────────────────────────────────────────────

class TaskCreate(_Payload):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: TaskStatus = "pending"
    priority: TaskPriority = "medium"
    due_date: Optional[date] = None
    tags: list[str] = Field(default_factory=list)
    completed: Optional[bool] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v):
        return _lenient_date(v)

    @field_validator("tags")
    @classmethod
    def trim_tags(cls, v: list[str]) -> list[str]:
        return [t.strip() for t in v if t and t.strip()]


class TaskUpdate(TaskCreate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[list[str]] = None

    @field_validator("title", "status", "priority", "tags", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)


# ── Expenses ──────────────────────────────────────────────

class ExpenseCreate(_Payload):
    description: str = Field(min_length=1, max_length=200)
    amount: float = Field(ge=0)
    category: ExpenseCategory = "Other"
    date: Optional[datetime] = None
    payment_method: PaymentMethod = "Cash"
    status: ExpenseStatus = "Paid"
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return _lenient_datetime(v)


class ExpenseUpdate(ExpenseCreate):
    description: Optional[str] = Field(default=None, min_length=1, max_length=200)
    amount: Optional[float] = Field(default=None, ge=0)
    category: Optional[ExpenseCategory] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[ExpenseStatus] = None

    @field_validator("description", "amount", "category", "payment_method", "status", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)


# ── Incomes ───────────────────────────────────────────────

class IncomeCreate(_Payload):
    source: str = Field(min_length=1, max_length=200)
    amount: float = Field(ge=0)
    date: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return _lenient_datetime(v)


class IncomeUpdate(IncomeCreate):
    source: Optional[str] = Field(default=None, min_length=1, max_length=200)
    amount: Optional[float] = Field(default=None, ge=0)

    @field_validator("source", "amount", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)


def parse_payload(model: Type[P], data: Any) -> P:
    """
    Validate ``data`` against ``model``.

    Raises:
        ValidationFailure: With one "<field>: <reason>" message per problem.
    """
    if not isinstance(data, dict):
        raise ValidationFailure(["Request body must be a JSON object"])
    try:
        return model.model_validate(data)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            field_name = ".".join(str(p) for p in err["loc"]) or "body"
            messages.append(f"{field_name}: {err['msg']}")
        raise ValidationFailure(messages) from e
