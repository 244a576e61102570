"""
handlers/income_handler.py
--------------------------
REST endpoints for income entries.
"""

from flask import Blueprint, jsonify

from handlers._params import json_body
from services.income_service import IncomeService

income_bp = Blueprint("income", __name__, url_prefix="/api/income")
income_service = IncomeService()


@income_bp.get("")
def list_incomes():
    return jsonify({"success": True, "data": [i.to_dict() for i in income_service.list_incomes()]})


@income_bp.get("/<income_id>")
def get_income(income_id: str):
    return jsonify({"success": True, "data": income_service.get_income(income_id).to_dict()})


@income_bp.post("")
def create_income():
    income = income_service.create_income(json_body())
    return jsonify({"success": True, "data": income.to_dict()}), 201


@income_bp.put("/<income_id>")
def update_income(income_id: str):
    income = income_service.update_income(income_id, json_body())
    return jsonify({"success": True, "data": income.to_dict()})


@income_bp.delete("/<income_id>")
def delete_income(income_id: str):
    income_service.delete_income(income_id)
    return jsonify({"success": True, "message": "Income deleted"})
