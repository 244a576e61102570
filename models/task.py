"""
models/task.py
--------------
Domain model for to-do tasks.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from models._dates import iso, to_date, to_datetime

TASK_STATUSES = ("pending", "in-progress", "completed")
TASK_PRIORITIES = ("low", "medium", "high")


@dataclass
class Task:
    """
    Represents a single task on the dashboard.

    Attributes:
        id: Store-assigned opaque identifier (None for new records).
        title: Short task title.
        description: Optional longer text.
        status: One of 'pending', 'in-progress', 'completed'.
        priority: One of 'low', 'medium', 'high'.
        due_date: Optional calendar date the task is due.
        tags: Free-form labels.
        external_event_id: Event id in the external calendar, set by sync.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    title: str
    description: Optional[str] = None
    status: str = "pending"
    priority: str = "medium"
    due_date: Optional[date] = None
    tags: list[str] = field(default_factory=list)
    external_event_id: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        """Completion is derived from the status, never stored separately."""
        return self.status == "completed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "dueDate": iso(self.due_date),
            "completed": self.completed,
            "tags": list(self.tags),
            "externalEventId": self.external_event_id,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a Task from its JSON shape (as returned by the API)."""
        status = data.get("status") or "pending"
        if data.get("completed") is True:
            status = "completed"
        return cls(
            id=data.get("id") or data.get("_id"),
            title=data.get("title", ""),
            description=data.get("description"),
            status=status,
            priority=data.get("priority") or "medium",
            due_date=to_date(data.get("dueDate")),
            tags=list(data.get("tags") or []),
            external_event_id=data.get("externalEventId"),
            created_at=to_datetime(data.get("createdAt")),
            updated_at=to_datetime(data.get("updatedAt")),
        )

    def __str__(self) -> str:
        mark = "✅" if self.completed else "⬜"
        due = f" (due {self.due_date})" if self.due_date else ""
        return f"{mark} [{self.priority}] {self.title}{due}"
