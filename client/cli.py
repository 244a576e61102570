"""
client/cli.py
-------------
Terminal front end for the Smart Dashboard.

Usage:
    python -m client.cli dashboard
    python -m client.cli tasks --status pending --sort priority --order desc --page 2
    python -m client.cli transactions --category Food --search lunch
    python -m client.cli insights
    python -m client.cli sync
    python -m client.cli settings --dark --language el
"""

import argparse
import sys
from dataclasses import replace
from typing import Callable, Optional

from client.api_client import ApiError, DashboardApi
from client.dashboard import DashboardController, LoadResult, TransactionFilter
from client.render import TextRenderer
from client.settings import FONT_SIZES, LANGUAGES, SettingsStore, apply
from models.task import TASK_STATUSES
from services.views import ALL, SORT_ORDERS, TASK_SORT_KEYS


def _load_with_retry(controller: DashboardController, renderer: TextRenderer, include_incomes: bool) -> Optional[LoadResult]:
    """Load, offering a retry on failure while attached to a terminal."""
    while True:
        result = controller.load(include_incomes=include_incomes)
        if result.ok:
            return result
        print(renderer.render_error(result.error))
        if not sys.stdin.isatty() or input("> ").strip().lower() != "r":
            return None


def _cmd_dashboard(args, controller: DashboardController, renderer: TextRenderer) -> int:
    result = _load_with_retry(controller, renderer, include_incomes=False)
    if result is None:
        return 1
    print(renderer.render_stats(controller.stats(result.data)))
    print()
    print(renderer.render_task_page(controller.task_page(result.data)))
    return 0


def _cmd_tasks(args, controller: DashboardController, renderer: TextRenderer) -> int:
    state = controller.task_state.with_status(args.status).with_search(args.search)
    state = state.with_sort(args.sort, args.order)
    if args.page_size:
        state = replace(state, page_size=args.page_size)
    controller.task_state = state.with_page(args.page)
    result = _load_with_retry(controller, renderer, include_incomes=False)
    if result is None:
        return 1
    print(renderer.render_task_page(controller.task_page(result.data)))
    return 0


def _cmd_transactions(args, controller: DashboardController, renderer: TextRenderer) -> int:
    controller.transaction_filter = TransactionFilter(category=args.category, search=args.search)
    result = _load_with_retry(controller, renderer, include_incomes=True)
    if result is None:
        return 1
    print(renderer.render_monthly(controller.monthly(result.data)))
    print()
    print(renderer.render_transactions(controller.transactions(result.data)))
    return 0


def _cmd_insights(args, controller: DashboardController, renderer: TextRenderer) -> int:
    try:
        body = controller.api.get_insights()
    except ApiError as e:
        print(renderer.render_error(e.message))
        return 1
    print(renderer.render_insights(body.get("aiInsights") or {}))
    return 0


def _cmd_sync(args, controller: DashboardController, renderer: TextRenderer) -> int:
    try:
        body = controller.api.sync_calendar()
    except ApiError as e:
        print(renderer.render_error(e.message))
        return 1
    print(f"📅 {body.get('message', '')}")
    return 0 if body.get("complete", True) else 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smart-dashboard", description="Smart Dashboard terminal client")
    parser.add_argument("--api", help="API base URL (default: API_BASE_URL)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("dashboard", help="Headline stats and the first page of tasks")

    tasks = sub.add_parser("tasks", help="Filtered, sorted, paginated task list")
    tasks.add_argument("--status", choices=(ALL,) + TASK_STATUSES, default=ALL)
    tasks.add_argument("--search", default="")
    tasks.add_argument("--sort", choices=TASK_SORT_KEYS, default="createdAt")
    tasks.add_argument("--order", choices=SORT_ORDERS, default="desc")
    tasks.add_argument("--page", type=_positive_int, default=1)
    tasks.add_argument("--page-size", type=_positive_int, default=None)

    tx = sub.add_parser("transactions", help="Monthly overview and unified transactions")
    tx.add_argument("--category", default=ALL)
    tx.add_argument("--search", default="")

    sub.add_parser("insights", help="AI-generated insights")
    sub.add_parser("sync", help="Push tasks to Google Calendar")

    st = sub.add_parser("settings", help="Show or change display settings")
    theme = st.add_mutually_exclusive_group()
    theme.add_argument("--dark", dest="dark_mode", action="store_true", default=None)
    theme.add_argument("--light", dest="dark_mode", action="store_false")
    st.add_argument("--font-size", choices=FONT_SIZES)
    st.add_argument("--language", choices=LANGUAGES)
    return parser


_COMMANDS: dict[str, Callable] = {
    "dashboard": _cmd_dashboard,
    "tasks": _cmd_tasks,
    "transactions": _cmd_transactions,
    "insights": _cmd_insights,
    "sync": _cmd_sync,
}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    store = SettingsStore()
    settings = store.load()

    if args.command == "settings":
        changes = {
            k: v for k, v in (
                ("dark_mode", args.dark_mode),
                ("font_size", args.font_size),
                ("language", args.language),
            ) if v is not None
        }
        if changes:
            settings = settings.with_changes(**changes)
            store.save(settings)
        for key, value in settings.to_dict().items():
            print(f"{key}: {value}")
        return 0

    renderer = TextRenderer(color=not args.no_color)
    apply(settings, renderer)
    api = DashboardApi(base_url=args.api) if args.api else DashboardApi()
    return _COMMANDS[args.command](args, DashboardController(api), renderer)


if __name__ == "__main__":
    sys.exit(main())
