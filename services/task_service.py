"""
services/task_service.py
-------------------------
Business logic for tasks.
Validates payloads, keeps status/completion consistent and delegates
persistence to the TaskRepository.
"""

from typing import Any, Optional

from config import TASKS_PER_PAGE
from models.task import Task
from repositories.task_repo import TaskRepository
from schemas import TaskCreate, TaskUpdate, parse_payload
from services.views import ALL, Page, filter_tasks, paginate, sort_tasks
from utils.errors import NotFound
from utils.logger import get_logger

logger = get_logger(__name__)


def resolve_status(status: str, completed: Optional[bool]) -> str:
    """
    Fold a ``completed`` flag into the status, the single source of truth.

    ``completed=True`` means 'completed'; un-completing a completed task
    moves it back to 'in-progress'.
    """
    if completed is True:
        return "completed"
    if completed is False and status == "completed":
        return "in-progress"
    return status


class TaskService:
    """Handles all business logic related to tasks."""

    def __init__(self, repo: Optional[TaskRepository] = None):
        self.repo = repo or TaskRepository()

    def list_tasks(self) -> list[Task]:
        return self.repo.get_all()

    def list_view(
        self,
        status: str = ALL,
        search: str = "",
        sort_by: str = "createdAt",
        order: str = "desc",
        page: Optional[int] = None,
        page_size: int = TASKS_PER_PAGE,
    ) -> Page:
        """
        Filtered and sorted tasks, optionally cut to one page.

        Without ``page`` every matching task is returned as a single page.
        """
        tasks = sort_tasks(filter_tasks(self.repo.get_all(), status, search), sort_by, order)
        if page is None:
            return paginate(tasks, 1, max(len(tasks), 1))
        return paginate(tasks, page, page_size)

    def get_task(self, task_id: str) -> Task:
        task = self.repo.get_by_id(task_id)
        if task is None:
            raise NotFound("Task", task_id)
        return task

    def create_task(self, data: Any) -> Task:
        payload = parse_payload(TaskCreate, data)
        task = Task(
            title=payload.title,
            description=payload.description,
            status=resolve_status(payload.status, payload.completed),
            priority=payload.priority,
            due_date=payload.due_date,
            tags=payload.tags,
        )
        return self.repo.add(task)

    def update_task(self, task_id: str, data: Any) -> Task:
        """
        Apply a partial update; only fields present in ``data`` change.

        Raises:
            ValidationFailure: If a present field is invalid.
            NotFound: If no task has ``task_id``.
        """
        payload = parse_payload(TaskUpdate, data)
        task = self.get_task(task_id)

        changes = payload.model_dump(exclude_unset=True)
        completed = changes.pop("completed", None)
        for name, value in changes.items():
            setattr(task, name, value)
        task.status = resolve_status(task.status, completed)

        if not self.repo.update(task):
            raise NotFound("Task", task_id)
        logger.info(f"Updated task #{task_id}: {', '.join(sorted(changes)) or 'status'}")
        return task

    def toggle_complete(self, task_id: str, completed: bool) -> Task:
        return self.update_task(task_id, {"completed": completed})

    def delete_task(self, task_id: str) -> None:
        if not self.repo.delete(task_id):
            raise NotFound("Task", task_id)
