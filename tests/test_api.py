"""HTTP-level tests for the Flask API, backed by in-memory repositories."""

import json

import pytest

from ai import gemini_insights
from handlers import calendar_handler
from repositories.expense_repo import _like_pattern
from security import rate_limiter
from server import create_app
from utils.errors import CalendarAuthorizationError, StoreFailure

INSIGHTS = {
    "summary": "Busy week.",
    "recommendations": ["Pay rent"],
    "spendingInsight": "Spending is low.",
}


def _post(client, url, body):
    return client.post(url, data=json.dumps(body), content_type="application/json")


def _put(client, url, body):
    return client.put(url, data=json.dumps(body), content_type="application/json")


# ── Tasks ─────────────────────────────────────────────────

def test_create_and_fetch_task(client):
    res = _post(client, "/api/tasks", {"title": "  Pay rent ", "priority": "high", "dueDate": "2025-01-01"})
    assert res.status_code == 201
    task = res.get_json()["data"]
    assert task["title"] == "Pay rent"
    assert task["dueDate"] == "2025-01-01"
    assert task["status"] == "pending"
    assert task["completed"] is False

    fetched = client.get(f"/api/tasks/{task['id']}").get_json()["data"]
    assert fetched["title"] == "Pay rent"


def test_missing_title_is_a_400_with_field_messages(client):
    res = _post(client, "/api/tasks", {"priority": "urgent"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["success"] is False
    assert any(m.startswith("title") for m in body["error"])
    assert any(m.startswith("priority") for m in body["error"])


def test_non_object_body_is_rejected(client):
    res = client.post("/api/tasks", data="not json", content_type="application/json")
    assert res.status_code == 400


def test_unknown_task_is_404(client):
    res = client.get("/api/tasks/does-not-exist")
    assert res.status_code == 404
    assert res.get_json()["error"] == "Task not found"
    assert client.delete("/api/tasks/does-not-exist").status_code == 404


def test_completed_flag_drives_status(client):
    task_id = _post(client, "/api/tasks", {"title": "Read book"}).get_json()["data"]["id"]

    done = _put(client, f"/api/tasks/{task_id}", {"completed": True}).get_json()["data"]
    assert done["status"] == "completed" and done["completed"] is True

    undone = _put(client, f"/api/tasks/{task_id}", {"completed": False}).get_json()["data"]
    assert undone["status"] == "in-progress" and undone["completed"] is False


def test_partial_update_keeps_other_fields(client):
    task_id = _post(client, "/api/tasks", {"title": "Write report", "priority": "low"}).get_json()["data"]["id"]
    updated = _put(client, f"/api/tasks/{task_id}", {"description": "Q1 numbers"}).get_json()["data"]
    assert updated["priority"] == "low"
    assert updated["description"] == "Q1 numbers"

    assert _put(client, f"/api/tasks/{task_id}", {"title": None}).status_code == 400


def test_delete_task(client):
    task_id = _post(client, "/api/tasks", {"title": "Temp"}).get_json()["data"]["id"]
    res = client.delete(f"/api/tasks/{task_id}")
    assert res.get_json() == {"success": True, "data": {}}
    assert client.get(f"/api/tasks/{task_id}").status_code == 404


def test_task_list_sorting_filtering_and_paging(client):
    _post(client, "/api/tasks", {"title": "Pay rent", "priority": "high", "dueDate": "2025-01-01"})
    _post(client, "/api/tasks", {"title": "Read book", "priority": "low"})
    _post(client, "/api/tasks", {"title": "Call bank", "priority": "medium", "dueDate": "2025-02-01"})

    by_priority = client.get("/api/tasks?sortBy=priority&order=desc").get_json()
    assert [t["title"] for t in by_priority["data"]] == ["Pay rent", "Call bank", "Read book"]
    assert "page" not in by_priority

    by_due = client.get("/api/tasks?sortBy=dueDate&order=asc").get_json()
    assert [t["title"] for t in by_due["data"]] == ["Pay rent", "Call bank", "Read book"]

    search = client.get("/api/tasks?search=BOOK").get_json()
    assert [t["title"] for t in search["data"]] == ["Read book"]

    page = client.get("/api/tasks?sortBy=dueDate&order=asc&page=2&pageSize=2").get_json()
    assert [t["title"] for t in page["data"]] == ["Read book"]
    assert (page["page"], page["totalPages"], page["count"]) == (2, 2, 3)


@pytest.mark.parametrize("query", ["sortBy=title", "order=sideways", "status=done", "page=0", "pageSize=x"])
def test_bad_list_parameters_are_400(client, query):
    assert client.get(f"/api/tasks?{query}").status_code == 400


# ── Expenses and income ───────────────────────────────────

def test_expense_filters_and_total(client):
    _post(client, "/api/expenses", {"description": "Groceries", "amount": 40, "category": "Food", "date": "2025-03-02"})
    _post(client, "/api/expenses", {"description": "Bus pass", "amount": 30, "category": "Transport", "date": "2025-03-05"})
    _post(client, "/api/expenses", {"description": "Dinner out", "amount": 60.5, "category": "Food", "date": "2025-03-07"})

    food = client.get("/api/expenses?category=Food").get_json()
    assert food["count"] == 2
    assert food["total"] == 100.5
    assert [e["description"] for e in food["data"]] == ["Dinner out", "Groceries"]

    assert client.get("/api/expenses?search=bus").get_json()["count"] == 1

    stats = client.get("/api/expenses/stats").get_json()["data"]
    assert stats[0] == {"category": "Food", "total": 100.5, "count": 2}


def test_expense_validation_and_not_found(client):
    res = _post(client, "/api/expenses", {"description": "Refund", "amount": -5})
    assert res.status_code == 400
    assert any(m.startswith("amount") for m in res.get_json()["error"])

    missing = client.delete("/api/expenses/nope")
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "Expense not found"


@pytest.mark.parametrize("when", ["Friday", "5", "March"])
def test_expense_date_must_be_iso(client, when):
    res = _post(client, "/api/expenses", {"description": "Lunch", "amount": 12, "date": when})
    assert res.status_code == 400
    assert any(m.startswith("date") for m in res.get_json()["error"])


def test_expense_update(client):
    exp_id = _post(client, "/api/expenses", {"description": "Taxi", "amount": 20}).get_json()["data"]["id"]
    updated = _put(client, f"/api/expenses/{exp_id}", {"amount": 25, "paymentMethod": "Credit Card"}).get_json()["data"]
    assert updated["amount"] == 25
    assert updated["paymentMethod"] == "Credit Card"
    assert updated["description"] == "Taxi"


def test_income_crud(client):
    res = _post(client, "/api/income", {"source": "Salary", "amount": 2500, "date": "2025-03-01"})
    assert res.status_code == 201
    inc_id = res.get_json()["data"]["id"]

    assert client.get("/api/income").get_json()["data"][0]["source"] == "Salary"
    assert _put(client, f"/api/income/{inc_id}", {"amount": 2600}).get_json()["data"]["amount"] == 2600
    assert client.delete(f"/api/income/{inc_id}").get_json() == {"success": True, "message": "Income deleted"}
    assert client.get(f"/api/income/{inc_id}").status_code == 404


# ── Derived views ─────────────────────────────────────────

def test_transactions_merge_both_kinds(client):
    _post(client, "/api/expenses", {"description": "Groceries", "amount": 40, "category": "Food", "date": "2025-03-02"})
    _post(client, "/api/income", {"source": "Salary", "amount": 2500, "date": "2025-03-01"})

    rows = client.get("/api/transactions").get_json()["data"]
    assert [(r["type"], r["categoryOrSource"]) for r in rows] == [("Expense", "Food"), ("Income", "Salary")]

    only_transport = client.get("/api/transactions?category=Transport").get_json()["data"]
    assert [r["type"] for r in only_transport] == ["Income"]


def test_monthly_stats_for_a_given_month(client):
    _post(client, "/api/expenses", {"description": "Rent", "amount": 100, "date": "2025-03-15"})
    _post(client, "/api/income", {"source": "Salary", "amount": 300, "date": "2025-03-10"})
    _post(client, "/api/income", {"source": "Bonus", "amount": 999, "date": "2025-04-01"})

    data = client.get("/api/stats/monthly?year=2025&month=3").get_json()["data"]
    assert data["monthlyIncome"] == 300
    assert data["monthlyExpenses"] == 100
    assert data["monthlySavings"] == 200
    assert data["budgetUsedPercent"] == 2.0

    assert client.get("/api/stats/monthly?month=13").status_code == 400


def test_dashboard_stats(client):
    task_id = _post(client, "/api/tasks", {"title": "A"}).get_json()["data"]["id"]
    _post(client, "/api/tasks", {"title": "B"})
    _put(client, f"/api/tasks/{task_id}", {"completed": True})
    _post(client, "/api/expenses", {"description": "Laptop", "amount": 1000, "date": "2020-01-01"})

    data = client.get("/api/stats/dashboard").get_json()["data"]
    assert data["totalTasks"] == 2
    assert data["completedTasks"] == 1
    assert data["completionRate"] == 0.5
    assert data["budgetUsed"] == 20.0


# ── AI ────────────────────────────────────────────────────

def test_ai_analyze_returns_insights(client, monkeypatch):
    monkeypatch.setattr(gemini_insights, "_generate_text", lambda prompt: "```json\n" + json.dumps(INSIGHTS) + "\n```")
    res = client.get("/api/ai/analyze")
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "aiInsights": INSIGHTS}


def test_ai_analyze_rejects_malformed_reply(client, monkeypatch):
    monkeypatch.setattr(gemini_insights, "_generate_text", lambda prompt: "I think you are doing great!")
    res = client.get("/api/ai/analyze")
    assert res.status_code == 500
    body = res.get_json()
    assert body["error"] == "AI analysis failed."
    assert "doing great" not in json.dumps(body)


# ── Calendar ──────────────────────────────────────────────

def test_calendar_sync_pushes_dated_tasks(client, calendar_client):
    _post(client, "/api/tasks", {"title": "Pay rent", "dueDate": "2025-01-01"})
    _post(client, "/api/tasks", {"title": "Someday"})

    res = client.post("/api/calendar/sync-tasks")
    assert res.status_code == 200
    assert res.get_json()["message"] == "All tasks synced to Google Calendar"
    assert [e["summary"] for e in calendar_client.created] == ["Pay rent"]

    tasks = client.get("/api/tasks?sortBy=dueDate&order=asc").get_json()["data"]
    assert tasks[0]["externalEventId"] == "evt-1"
    assert tasks[1]["externalEventId"] is None


def test_calendar_sync_without_token(client, monkeypatch):
    def no_token():
        raise CalendarAuthorizationError("No token found. Run manual auth flow.")

    monkeypatch.setattr(calendar_handler, "DEBUG", False)
    monkeypatch.setattr(calendar_handler.calendar_service, "client_factory", no_token)
    res = client.post("/api/calendar/sync-tasks")
    assert res.status_code == 500
    assert res.get_json() == {"error": "Calendar is not authorized. Run manual auth flow."}


def _failing_store():
    raise StoreFailure('relation "tasks" does not exist at host db-internal:5432')


def test_calendar_sync_hides_store_detail_in_production(client, monkeypatch):
    monkeypatch.setattr(calendar_handler, "DEBUG", False)
    monkeypatch.setattr(calendar_handler.calendar_service.task_repo, "get_all", _failing_store)

    res = client.post("/api/calendar/sync-tasks")

    assert res.status_code == 500
    assert res.get_json() == {"error": "Server Error"}
    assert "db-internal" not in res.get_data(as_text=True)


def test_calendar_sync_shows_store_detail_in_development(client, monkeypatch):
    monkeypatch.setattr(calendar_handler, "DEBUG", True)
    monkeypatch.setattr(calendar_handler.calendar_service.task_repo, "get_all", _failing_store)

    body = client.post("/api/calendar/sync-tasks").get_json()

    assert body["error"] == "Server Error"
    assert "db-internal" in body["message"]


def test_calendar_events_feed(client):
    _post(client, "/api/tasks", {"title": "Pay rent", "dueDate": "2025-01-01"})
    _post(client, "/api/income", {"source": "Salary", "amount": 10, "date": "2025-01-02"})

    events = client.get("/api/calendar/events").get_json()
    assert {e["type"] for e in events} == {"task", "income"}


# ── Server plumbing ───────────────────────────────────────

def test_unknown_route_is_json_404(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "error": "Route not found"}


def test_health_and_index(client):
    assert client.get("/api/health").get_json()["success"] is True
    assert client.get("/").get_json()["endpoints"]["tasks"] == "/api/tasks"


def test_token_guard(app):
    secured = create_app(api_token="secret").test_client()
    assert secured.get("/api/tasks").status_code == 401
    assert secured.get("/api/tasks", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert secured.get("/api/tasks", headers={"Authorization": "Bearer secret"}).status_code == 200
    assert secured.get("/api/health").status_code == 200


def test_rate_limit_on_calendar_sync(client, monkeypatch):
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_REQUESTS", 1)
    assert client.post("/api/calendar/sync-tasks").status_code == 200
    assert client.post("/api/calendar/sync-tasks").status_code == 429


def test_rate_limiter_forgets_idle_clients(client):
    rate_limiter._client_timestamps["10.0.0.9:calendar.sync_tasks"] = [0.0]

    assert client.post("/api/calendar/sync-tasks").status_code == 200

    assert "10.0.0.9:calendar.sync_tasks" not in rate_limiter._client_timestamps
    assert len(rate_limiter._client_timestamps) == 1


def test_cors_for_allowed_origin_only(client):
    allowed = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert allowed.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"

    other = client.get("/api/health", headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in other.headers

    preflight = client.options("/api/tasks", headers={"Origin": "http://localhost:3000"})
    assert preflight.status_code == 204


def test_like_pattern_escapes_wildcards():
    assert _like_pattern("50%_off") == "%50\\%\\_off%"
