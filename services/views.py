"""
services/views.py
-----------------
Derived views over stored records: task sorting, filtering and pagination,
and the unified expense/income transaction list.

Everything here is pure: inputs are never mutated and nothing is cached,
so the functions are safe to call from any request thread.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from models._dates import iso, to_datetime
from models.expense import Expense
from models.income import Income
from models.task import Task

T = TypeVar("T")

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}
TASK_SORT_KEYS = ("createdAt", "dueDate", "priority")
SORT_ORDERS = ("asc", "desc")
ALL = "all"


# ── Tasks ─────────────────────────────────────────────────

def _sort_missing_last(
    items: Sequence[T], key: Callable[[T], Any], reverse: bool
) -> list[T]:
    """
    Sort by ``key`` but keep items whose key is None after all others,
    whatever the direction. Python's sort is stable, so ties keep input order.
    """
    present = [i for i in items if key(i) is not None]
    missing = [i for i in items if key(i) is None]
    return sorted(present, key=key, reverse=reverse) + missing


def sort_tasks(tasks: Iterable[Task], sort_by: str = "createdAt", order: str = "desc") -> list[Task]:
    """
    Return the tasks ordered by ``sort_by`` in direction ``order``.

    ``dueDate``: tasks without a due date always come last.
    ``priority``: high > medium > low, so ``desc`` puts high first.
    """
    if sort_by not in TASK_SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by!r}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order!r}")

    reverse = order == "desc"
    tasks = list(tasks)
    if sort_by == "priority":
        return sorted(tasks, key=lambda t: PRIORITY_ORDER.get(t.priority, 0), reverse=reverse)
    if sort_by == "dueDate":
        return _sort_missing_last(tasks, lambda t: to_datetime(t.due_date), reverse)
    return _sort_missing_last(tasks, lambda t: to_datetime(t.created_at), reverse)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def filter_tasks(tasks: Iterable[Task], status: str = ALL, query: str = "") -> list[Task]:
    """Keep tasks matching ``status`` (or any, for 'all') whose title or description contains ``query``."""
    needle = (query or "").lower()
    status = status or ALL
    return [
        t for t in tasks
        if (status == ALL or t.status == status)
        and (not needle or _contains(t.title, needle) or _contains(t.description, needle))
    ]


@dataclass
class Page:
    """One page of a longer sequence. ``page`` is 1-based."""
    items: list
    page: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int = 1, page_size: int = 5) -> Page:
    """
    Slice ``items`` to ``[(page-1)*page_size, page*page_size)``.

    Pages below 1 are treated as page 1; pages past the end are empty.
    """
    if page_size < 1:
        raise ValueError("page_size must be a positive integer")
    page = max(1, int(page))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(items),
    )


def task_view(
    tasks: Iterable[Task],
    status: str = ALL,
    query: str = "",
    sort_by: str = "createdAt",
    order: str = "desc",
    page: int = 1,
    page_size: int = 5,
) -> Page:
    """Filter, then sort, then paginate: exactly what the task list shows."""
    filtered = filter_tasks(tasks, status, query)
    return paginate(sort_tasks(filtered, sort_by, order), page, page_size)


# ── Transactions ──────────────────────────────────────────

@dataclass
class Transaction:
    """A read-only row of the unified expense/income list."""
    type: str  # 'Expense' | 'Income'
    amount: float
    category_or_source: str
    date: Optional[datetime] = None
    description: Optional[str] = None
    status: Optional[str] = None
    payment_method: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return self.type == "Expense"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "date": iso(self.date),
            "categoryOrSource": self.category_or_source,
            "description": self.description,
            "amount": self.amount,
            "status": self.status,
            "paymentMethod": self.payment_method,
        }


def _from_expense(e: Expense) -> Transaction:
    return Transaction(
        id=e.id, type="Expense", amount=e.amount, category_or_source=e.category,
        date=to_datetime(e.date), description=e.description,
        status=e.status, payment_method=e.payment_method,
    )


def _from_income(i: Income) -> Transaction:
    return Transaction(
        id=i.id, type="Income", amount=i.amount, category_or_source=i.source,
        date=to_datetime(i.date),
    )


def merge_transactions(expenses: Iterable[Expense], incomes: Iterable[Income]) -> list[Transaction]:
    """Expenses then incomes, tagged with their type, newest first; undated rows go last."""
    rows = [_from_expense(e) for e in expenses] + [_from_income(i) for i in incomes]
    return _sort_missing_last(rows, lambda t: t.date, reverse=True)


def filter_transactions(
    transactions: Iterable[Transaction], category: str = ALL, query: str = ""
) -> list[Transaction]:
    """
    Category applies to expenses only; incomes always pass it.
    The search matches the description of an expense or the source of an income.
    """
    needle = (query or "").lower()
    category = category or ALL
    result = []
    for t in transactions:
        if t.is_expense and category != ALL and t.category_or_source != category:
            continue
        text = t.description if t.is_expense else t.category_or_source
        if needle and not _contains(text, needle):
            continue
        result.append(t)
    return result


def transaction_view(
    expenses: Iterable[Expense], incomes: Iterable[Income], category: str = ALL, query: str = ""
) -> list[Transaction]:
    return filter_transactions(merge_transactions(expenses, incomes), category, query)
