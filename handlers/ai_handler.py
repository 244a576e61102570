"""
handlers/ai_handler.py
----------------------
GET /api/ai/analyze: AI summary of the current tasks and expenses.
"""

from flask import Blueprint, jsonify

from config import DEBUG
from security.rate_limiter import rate_limited
from services.insight_service import InsightService
from utils.errors import IntegrationFailure, InvalidResponseFormat


ai_bp = Blueprint("ai", __name__, url_prefix="/api/ai")
insight_service = InsightService()


@ai_bp.get("/analyze")
@rate_limited
def analyze():
    try:
        insights = insight_service.analyze()
    except InvalidResponseFormat as e:
        return jsonify({"success": False, "error": "AI analysis failed.", "message": e.message}), 500
    except IntegrationFailure as e:
        body = {"success": False, "error": "AI analysis failed."}
        if DEBUG:
            body["message"] = e.message
        return jsonify(body), 500
    return jsonify({"success": True, "aiInsights": insights})
