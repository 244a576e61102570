"""
handlers/dashboard_handler.py
-----------------------------
Derived views: unified transactions, monthly overview and dashboard cards.
"""

from datetime import datetime

from flask import Blueprint, jsonify, request

from handlers._params import arg_int
from services.dashboard_service import DashboardService
from services.views import ALL
from utils.errors import ValidationFailure

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")
dashboard_service = DashboardService()


@dashboard_bp.get("/transactions")
def transactions():
    """GET /api/transactions?category&search: expenses and incomes, newest first."""
    rows = dashboard_service.transactions(
        category=request.args.get("category") or ALL,
        search=request.args.get("search", ""),
    )
    return jsonify({"success": True, "count": len(rows), "data": [r.to_dict() for r in rows]})


@dashboard_bp.get("/stats/monthly")
def monthly_stats():
    """GET /api/stats/monthly[?year=2025&month=1]; defaults to the current month."""
    now = datetime.now()
    year = arg_int("year", now.year)
    month = arg_int("month", now.month)
    if month > 12:
        raise ValidationFailure(["month: must be between 1 and 12"])
    if year > 9999:
        raise ValidationFailure(["year: must be at most 9999"])
    summary = dashboard_service.monthly(now=datetime(year, month, 1))
    return jsonify({"success": True, "data": summary.to_dict()})


@dashboard_bp.get("/stats/dashboard")
def dashboard_stats():
    return jsonify({"success": True, "data": dashboard_service.stats().to_dict()})
