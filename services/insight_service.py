"""
services/insight_service.py
----------------------------
Feeds the current tasks and expenses to the AI analyzer.
"""

from typing import Optional

from ai.gemini_insights import generate_insights
from repositories.expense_repo import ExpenseRepository
from repositories.task_repo import TaskRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class InsightService:
    """Builds AI insights from everything currently in the store."""

    def __init__(
        self,
        task_repo: Optional[TaskRepository] = None,
        expense_repo: Optional[ExpenseRepository] = None,
    ):
        self.task_repo = task_repo or TaskRepository()
        self.expense_repo = expense_repo or ExpenseRepository()

    def analyze(self) -> dict:
        """
        Returns:
            Dict with keys: summary, recommendations, spendingInsight.

        Raises:
            IntegrationFailure / InvalidResponseFormat from the AI layer.
        """
        tasks = self.task_repo.get_all()
        expenses = self.expense_repo.get_all()
        logger.info(f"Requesting AI insights for {len(tasks)} tasks and {len(expenses)} expenses")
        return generate_insights(tasks, expenses)
