"""Tests for the dashboard client: state, loading, settings and rendering."""

import json
from datetime import datetime

import pytest
import requests

from client.api_client import ApiError, DashboardApi
from client.dashboard import DashboardController, TaskViewState
from client.i18n import t
from client.render import TextRenderer
from client.settings import DEFAULTS, DashboardSettings, SettingsStore, apply


class FakeApi:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def get_tasks(self):
        if self.fail:
            raise ApiError("Could not reach the server")
        return {"data": [
            {"id": "1", "title": "Pay rent", "priority": "high", "dueDate": "2025-01-01", "status": "completed"},
            {"id": "2", "title": "Read book", "priority": "low"},
        ]}

    def get_expenses(self):
        return {"total": 140.0, "data": [
            {"id": "e1", "description": "Rent", "amount": 100, "category": "Other", "date": "2025-03-15T00:00:00"},
            {"id": "e2", "description": "Lunch", "amount": 40, "category": "Food", "date": "2025-02-01T00:00:00"},
        ]}

    def get_incomes(self):
        return {"data": [{"id": "i1", "source": "Salary", "amount": 300, "date": "2025-03-10T00:00:00"}]}


# ── Task view state ───────────────────────────────────────

def test_changing_filter_search_or_sort_resets_the_page():
    state = TaskViewState().with_page(3)
    assert state.page == 3
    assert state.with_status("pending").page == 1
    assert state.with_search("rent").page == 1
    assert state.with_sort("priority").page == 1
    assert state.with_sort("priority").order == "desc"
    assert TaskViewState().with_page(0).page == 1


# ── Controller ────────────────────────────────────────────

def test_load_builds_every_view():
    controller = DashboardController(api=FakeApi(), monthly_budget=1000)
    result = controller.load(include_incomes=True)

    assert result.ok
    data = result.data
    assert [t.title for t in data.tasks] == ["Pay rent", "Read book"]
    assert data.expense_total == 140.0

    stats = controller.stats(data)
    assert (stats.total_tasks, stats.completed_tasks) == (2, 1)
    assert stats.budget_used_percent == 14.0

    monthly = controller.monthly(data, now=datetime(2025, 3, 31))
    assert (monthly.monthly_income, monthly.monthly_expenses, monthly.savings) == (300, 100, 200)

    controller.task_state = controller.task_state.with_sort("priority", "asc")
    assert [t.title for t in controller.task_page(data).items] == ["Read book", "Pay rent"]

    assert [r.id for r in controller.transactions(data)] == ["e1", "i1", "e2"]


def test_failed_fetch_becomes_a_retryable_error():
    result = DashboardController(api=FakeApi(fail=True)).load()
    assert not result.ok
    assert result.retryable
    assert result.error == "Failed to load data. Make sure the server is running."
    assert result.data is None


class MalformedApi(FakeApi):
    def __init__(self, tasks_body=None, expenses_body=None):
        super().__init__()
        self.tasks_body = tasks_body
        self.expenses_body = expenses_body

    def get_tasks(self):
        return self.tasks_body if self.tasks_body is not None else super().get_tasks()

    def get_expenses(self):
        return self.expenses_body if self.expenses_body is not None else super().get_expenses()


@pytest.mark.parametrize(
    "api",
    [
        MalformedApi(tasks_body="<html>oops</html>"),
        MalformedApi(tasks_body={"data": "not a list"}),
        MalformedApi(expenses_body={"data": [{"description": "Lunch", "amount": "twelve"}]}),
    ],
)
def test_malformed_bodies_become_a_retryable_error(api):
    result = DashboardController(api=api).load()
    assert result.retryable
    assert result.error == DashboardController.LOAD_ERROR


def test_empty_tasks_body_becomes_a_retryable_error():
    class EmptyTasksApi(FakeApi):
        def get_tasks(self):
            return None

    result = DashboardController(api=EmptyTasksApi()).load()
    assert result.retryable
    assert result.data is None


# ── API client ────────────────────────────────────────────

class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def test_api_sends_token_and_returns_json():
    session = FakeSession(FakeResponse(200, {"success": True, "data": []}))
    api = DashboardApi(base_url="http://server/api/", token="secret", timeout=3, session=session)

    assert api.get_tasks(status="pending") == {"success": True, "data": []}
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://server/api/tasks")
    assert kwargs["params"] == {"status": "pending"}
    assert kwargs["timeout"] == 3
    assert session.headers["Authorization"] == "Bearer secret"


def test_network_failure_is_an_api_error():
    api = DashboardApi(session=FakeSession(exc=requests.ConnectionError("refused")), token="")
    with pytest.raises(ApiError) as exc:
        api.get_expenses()
    assert exc.value.status is None


def test_error_answers_carry_status_and_message():
    session = FakeSession(FakeResponse(400, {"success": False, "error": ["title: Field required"]}))
    api = DashboardApi(session=session, token="")
    with pytest.raises(ApiError) as exc:
        api.create_task({})
    assert exc.value.status == 400
    assert exc.value.message == "title: Field required"


class HtmlResponse(FakeResponse):
    def json(self):
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


def test_success_without_json_body_is_an_api_error():
    api = DashboardApi(session=FakeSession(HtmlResponse(200, None)), token="")
    with pytest.raises(ApiError) as exc:
        api.get_tasks()
    assert exc.value.status == 200


# ── Settings ──────────────────────────────────────────────

def test_missing_settings_file_gives_defaults(tmp_path):
    assert SettingsStore(str(tmp_path / "settings.json")).load() == DEFAULTS


def test_corrupt_settings_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{broken", encoding="utf-8")
    assert SettingsStore(str(path)).load() == DEFAULTS

    path.write_text(json.dumps({"fontSize": "huge"}), encoding="utf-8")
    assert SettingsStore(str(path)).load() == DEFAULTS


def test_settings_survive_a_save_and_load(tmp_path):
    store = SettingsStore(str(tmp_path / "nested" / "settings.json"))
    chosen = DEFAULTS.with_changes(dark_mode=True, language="el")
    store.save(chosen)
    assert store.load() == chosen


def test_invalid_settings_values_are_rejected():
    with pytest.raises(ValueError):
        DashboardSettings(language="fr")


def test_apply_pushes_settings_into_the_renderer():
    renderer = TextRenderer(color=False)
    apply(DashboardSettings(dark_mode=True, font_size="large", language="el"), renderer)
    assert (renderer.dark, renderer.font_size, renderer.language) == (True, "large", "el")
    assert "Επανάληψη" in renderer.render_error("boom")


# ── i18n and rendering ────────────────────────────────────

def test_translation_falls_back_to_english_then_key():
    assert t("dashboard.title", "el") == "Έξυπνος Πίνακας"
    assert t("insights.title", "el") == "AI Insights"
    assert t("no.such.key", "el") == "no.such.key"
    assert t("tasks.page", "en", page=1, pages=3) == "Page 1 of 3"


def test_render_error_offers_retry():
    text = TextRenderer(color=False).render_error("Failed to load data. Make sure the server is running.")
    assert "Failed to load data" in text
    assert "Retry" in text


def test_progress_bar_flags_overspending():
    renderer = TextRenderer(color=False)
    assert renderer.progress_bar(120).endswith("⚠️")
    assert renderer.progress_bar(85).endswith("⚡")
    assert "░" in renderer.progress_bar(10)


# ── CLI ───────────────────────────────────────────────────

def test_settings_command_persists_changes(tmp_path, monkeypatch, capsys):
    from client import cli

    path = str(tmp_path / "settings.json")
    monkeypatch.setattr(cli, "SettingsStore", lambda: SettingsStore(path))

    assert cli.main(["settings", "--dark", "--font-size", "large"]) == 0
    assert "darkMode: True" in capsys.readouterr().out
    assert SettingsStore(path).load() == DashboardSettings(dark_mode=True, font_size="large")


def test_tasks_command_rejects_non_positive_page():
    from client import cli

    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["tasks", "--page", "0"])
