"""
client/api_client.py
--------------------
HTTP client for the Smart Dashboard REST API.
"""

from typing import Any, Optional

import requests

from config import API_BASE_URL, API_TIMEOUT_SECONDS, API_TOKEN
from utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """A request failed: network error, or a non-2xx answer from the server."""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class DashboardApi:
    """One method per REST call the dashboard makes."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: str = API_TOKEN,
        timeout: float = API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"Could not reach the server: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            error = payload.get("error") if isinstance(payload, dict) else None
            if isinstance(error, list):
                error = "; ".join(error)
            message = error or f"HTTP {response.status_code}"
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code, payload)
        if payload is None:
            logger.warning(f"{method} {url} -> {response.status_code} without a JSON body")
            raise ApiError("The server sent an unreadable response", response.status_code)
        return payload

    # ── Tasks ─────────────────────────────────────────────

    def get_tasks(self, **params) -> dict:
        return self._request("GET", "/tasks", params=params or None)

    def get_task(self, task_id: str) -> dict:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(self, data: dict) -> dict:
        return self._request("POST", "/tasks", json=data)

    def update_task(self, task_id: str, data: dict) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=data)

    def toggle_task_complete(self, task_id: str, completed: bool) -> dict:
        return self.update_task(task_id, {"completed": completed})

    def delete_task(self, task_id: str) -> dict:
        return self._request("DELETE", f"/tasks/{task_id}")

    # ── Expenses ──────────────────────────────────────────

    def get_expenses(self, category: Optional[str] = None, search: Optional[str] = None) -> dict:
        params = {k: v for k, v in (("category", category), ("search", search)) if v}
        return self._request("GET", "/expenses", params=params or None)

    def create_expense(self, data: dict) -> dict:
        return self._request("POST", "/expenses", json=data)

    def update_expense(self, expense_id: str, data: dict) -> dict:
        return self._request("PUT", f"/expenses/{expense_id}", json=data)

    def delete_expense(self, expense_id: str) -> dict:
        return self._request("DELETE", f"/expenses/{expense_id}")

    # ── Income ────────────────────────────────────────────

    def get_incomes(self) -> dict:
        return self._request("GET", "/income")

    def create_income(self, data: dict) -> dict:
        return self._request("POST", "/income", json=data)

    def update_income(self, income_id: str, data: dict) -> dict:
        return self._request("PUT", f"/income/{income_id}", json=data)

    def delete_income(self, income_id: str) -> dict:
        return self._request("DELETE", f"/income/{income_id}")

    # ── Integrations ──────────────────────────────────────

    def get_insights(self) -> dict:
        return self._request("GET", "/ai/analyze")

    def sync_calendar(self) -> dict:
        return self._request("POST", "/calendar/sync-tasks")

    def get_calendar_events(self) -> list:
        return self._request("GET", "/calendar/events")
