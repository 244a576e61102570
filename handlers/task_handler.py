"""
handlers/task_handler.py
------------------------
REST endpoints for tasks. Delegates all logic to TaskService.
"""

from flask import Blueprint, jsonify, request

from config import TASKS_PER_PAGE
from handlers._params import arg_choice, arg_int, json_body
from models.task import TASK_STATUSES
from services.task_service import TaskService
from services.views import ALL, SORT_ORDERS, TASK_SORT_KEYS

task_bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")
task_service = TaskService()


@task_bp.get("")
def list_tasks():
    """
    GET /api/tasks?status&search&sortBy&order&page&pageSize

    Without ``page`` every matching task is returned.
    """
    status = arg_choice("status", (ALL,) + TASK_STATUSES, ALL)
    sort_by = arg_choice("sortBy", TASK_SORT_KEYS, "createdAt")
    order = arg_choice("order", SORT_ORDERS, "desc")
    page = arg_int("page")
    page_size = arg_int("pageSize", TASKS_PER_PAGE)

    view = task_service.list_view(
        status=status,
        search=request.args.get("search", ""),
        sort_by=sort_by,
        order=order,
        page=page,
        page_size=page_size,
    )
    body = {
        "success": True,
        "count": view.total_items,
        "data": [t.to_dict() for t in view.items],
    }
    if page is not None:
        body.update(page=view.page, pageSize=view.page_size, totalPages=view.total_pages)
    return jsonify(body)


@task_bp.get("/<task_id>")
def get_task(task_id: str):
    return jsonify({"success": True, "data": task_service.get_task(task_id).to_dict()})


@task_bp.post("")
def create_task():
    task = task_service.create_task(json_body())
    return jsonify({"success": True, "data": task.to_dict()}), 201


@task_bp.put("/<task_id>")
def update_task(task_id: str):
    task = task_service.update_task(task_id, json_body())
    return jsonify({"success": True, "data": task.to_dict()})


@task_bp.delete("/<task_id>")
def delete_task(task_id: str):
    task_service.delete_task(task_id)
    return jsonify({"success": True, "data": {}})
