"""
schemas/ - Request Validation
=============================
pydantic models for the JSON bodies the API accepts. They only validate
and normalise input; building domain objects is the services' job.
"""

from schemas.payloads import (
    ExpenseCreate,
    ExpenseUpdate,
    IncomeCreate,
    IncomeUpdate,
    TaskCreate,
    TaskUpdate,
    parse_payload,
)

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "ExpenseCreate",
    "ExpenseUpdate",
    "IncomeCreate",
    "IncomeUpdate",
    "parse_payload",
]
