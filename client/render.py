"""
client/render.py
----------------
Plain-text rendering of the dashboard views for the terminal.
"""

from typing import Iterable

from client.i18n import t
from config import CURRENCY_SYMBOL
from services.stats import DashboardStats, MonthlySummary
from services.views import Page, Transaction

_BAR_LENGTH = {"small": 10, "medium": 15, "large": 25}
_THEMES = {
    False: {"heading": "\033[1;34m", "reset": "\033[0m"},
    True: {"heading": "\033[1;97;40m", "reset": "\033[0m"},
}
_PRIORITY_ICON = {"high": "🔴", "medium": "🟡", "low": "🟢"}


class TextRenderer:
    """Turns derived views into text. Settings are applied via client.settings.apply."""

    def __init__(self, color: bool = True):
        self.color = color
        self.dark = False
        self.font_size = "medium"
        self.language = "en"

    # ── Settings targets ──────────────────────────────────

    def set_theme(self, dark: bool) -> None:
        self.dark = dark

    def set_font_size(self, size: str) -> None:
        self.font_size = size

    def set_language(self, language: str) -> None:
        self.language = language

    # ── Helpers ───────────────────────────────────────────

    def _t(self, path: str, **fmt) -> str:
        return t(path, self.language, **fmt)

    def _heading(self, text: str) -> str:
        if not self.color:
            return text
        theme = _THEMES[self.dark]
        return f"{theme['heading']}{text}{theme['reset']}"

    def progress_bar(self, pct: float) -> str:
        """Generate a text progress bar."""
        length = _BAR_LENGTH.get(self.font_size, 15)
        filled = int(min(max(pct, 0), 100) / 100 * length)
        empty = length - filled
        if pct >= 100:
            return "█" * length + " ⚠️"
        elif pct >= 80:
            return "█" * filled + "░" * empty + " ⚡"
        return "█" * filled + "░" * empty

    @staticmethod
    def _money(amount: float) -> str:
        return f"{CURRENCY_SYMBOL}{amount:,.2f}"

    # ── Views ─────────────────────────────────────────────

    def render_error(self, message: str) -> str:
        return f"⚠️ {message}\n  [r] {self._t('dashboard.retry')}"

    def render_stats(self, stats: DashboardStats) -> str:
        remaining = stats.monthly_budget - stats.total_expenses
        lines = [
            self._heading(f"📊 {self._t('dashboard.title')}"),
            f"  📋 {self._t('dashboard.tasks')}: {stats.total_tasks}"
            f" | ✅ {self._t('dashboard.completed')}: {stats.completed_tasks}"
            f" | ⏳ {self._t('dashboard.active')}: {stats.active_tasks}",
            f"  📈 {self._t('dashboard.completionRate')}: {stats.completion_rate * 100:.0f}%",
            f"  💸 {self._t('dashboard.totalExpenses')}: {self._money(stats.total_expenses)}",
            f"  💰 {self._t('dashboard.budget')}: {stats.budget_used_percent:.1f}%"
            f" ({self._money(remaining)} {self._t('dashboard.remaining')})",
            f"  {self.progress_bar(stats.budget_used_percent)}",
        ]
        return "\n".join(lines)

    def render_task_page(self, page: Page) -> str:
        lines = [self._heading(f"📋 {self._t('tasks.title')}")]
        if not page.items:
            lines.append(f"  📭 {self._t('tasks.empty')}")
            return "\n".join(lines)
        for task in page.items:
            mark = "✅" if task.completed else "⬜"
            due = f" | 📅 {task.due_date}" if task.due_date else ""
            lines.append(f"  {mark} {_PRIORITY_ICON.get(task.priority, '⚪')} {task.title}{due}")
        lines.append(f"  {self._t('tasks.page', page=page.page, pages=max(page.total_pages, 1))}")
        return "\n".join(lines)

    def render_monthly(self, summary: MonthlySummary) -> str:
        icon = "📈" if summary.savings >= 0 else "📉"
        return "\n".join([
            self._heading(f"📅 {self._t('expenses.title')} ({summary.month}/{summary.year})"),
            f"  💰 {self._t('expenses.income')}: {self._money(summary.monthly_income)}",
            f"  💸 {self._t('expenses.expenses')}: {self._money(summary.monthly_expenses)}",
            f"  {icon} {self._t('expenses.savings')}: {self._money(summary.savings)}",
            f"  {self.progress_bar(summary.budget_used_percent)} {summary.budget_used_percent:.1f}%",
        ])

    def render_transactions(self, rows: Iterable[Transaction]) -> str:
        lines = [self._heading(f"🧾 {self._t('expenses.transactions')}")]
        rows = list(rows)
        if not rows:
            lines.append(f"  📭 {self._t('expenses.empty')}")
        for r in rows:
            sign, icon = ("-", "🔴") if r.is_expense else ("+", "🟢")
            when = r.date.date().isoformat() if r.date else "—"
            desc = f" - {r.description}" if r.description else ""
            lines.append(f"  {icon} {when} | {r.category_or_source} | {sign}{self._money(r.amount)}{desc}")
        return "\n".join(lines)

    def render_insights(self, insights: dict) -> str:
        lines = [
            self._heading(f"🤖 {self._t('insights.title')}"),
            f"  {self._t('insights.summary')}: {insights.get('summary', '')}",
            f"  {self._t('insights.recommendations')}:",
        ]
        lines += [f"    • {rec}" for rec in insights.get("recommendations", [])]
        lines.append(f"  {self._t('insights.spending')}: {insights.get('spendingInsight', '')}")
        return "\n".join(lines)
