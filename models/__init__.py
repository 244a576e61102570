"""
models/ - Domain Models
=======================
Plain dataclasses for the three record kinds. They carry no persistence
logic; repositories build them from rows and the API serializes them with
``to_dict()``.
"""

from models.expense import Expense, EXPENSE_CATEGORIES, PAYMENT_METHODS, EXPENSE_STATUSES
from models.income import Income
from models.task import Task, TASK_STATUSES, TASK_PRIORITIES

__all__ = [
    "Task",
    "Expense",
    "Income",
    "TASK_STATUSES",
    "TASK_PRIORITIES",
    "EXPENSE_CATEGORIES",
    "PAYMENT_METHODS",
    "EXPENSE_STATUSES",
]
