"""
handlers/expense_handler.py
----------------------------
REST endpoints for expenses. Delegates all logic to ExpenseService.
"""

from flask import Blueprint, jsonify, request

from handlers._params import json_body
from services.expense_service import ExpenseService

expense_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")
expense_service = ExpenseService()


@expense_bp.get("")
def list_expenses():
    """GET /api/expenses?category=Food&search=rent (newest first, with total)."""
    result = expense_service.list_expenses(
        category=request.args.get("category"),
        search=request.args.get("search"),
    )
    expenses = result["expenses"]
    return jsonify({
        "success": True,
        "count": len(expenses),
        "total": result["total"],
        "data": [e.to_dict() for e in expenses],
    })


@expense_bp.get("/stats")
def expense_stats():
    return jsonify({"success": True, "data": expense_service.get_category_stats()})


@expense_bp.get("/<expense_id>")
def get_expense(expense_id: str):
    return jsonify({"success": True, "data": expense_service.get_expense(expense_id).to_dict()})


@expense_bp.post("")
def create_expense():
    expense = expense_service.create_expense(json_body())
    return jsonify({"success": True, "data": expense.to_dict()}), 201


@expense_bp.put("/<expense_id>")
def update_expense(expense_id: str):
    expense = expense_service.update_expense(expense_id, json_body())
    return jsonify({"success": True, "data": expense.to_dict()})


@expense_bp.delete("/<expense_id>")
def delete_expense(expense_id: str):
    expense_service.delete_expense(expense_id)
    return jsonify({"success": True, "data": {}})
