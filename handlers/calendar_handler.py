"""
handlers/calendar_handler.py
----------------------------
Calendar endpoints: push tasks to Google Calendar, and the local event feed.
"""

from flask import Blueprint, jsonify

from config import DEBUG
from security.rate_limiter import rate_limited
from services.calendar_service import CalendarService
from utils.errors import DashboardError
from utils.logger import get_logger

logger = get_logger(__name__)

calendar_bp = Blueprint("calendar", __name__, url_prefix="/api/calendar")
calendar_service = CalendarService()


@calendar_bp.post("/sync-tasks")
@rate_limited
def sync_tasks():
    try:
        result = calendar_service.sync_tasks()
    except DashboardError as e:
        logger.error(f"Error syncing tasks: {e}")
        body = {"error": e.public_message}
        if DEBUG and e.message != e.public_message:
            body["message"] = e.message
        return jsonify(body), e.status_code
    return jsonify(result.to_dict())


@calendar_bp.get("/events")
def events():
    try:
        return jsonify(calendar_service.events())
    except DashboardError as e:
        logger.error(f"Error fetching calendar data: {e}")
        return jsonify({"error": "Failed to load calendar data"}), 500
