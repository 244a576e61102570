"""
server.py
---------
Flask application factory for the Smart Dashboard API.

Responsibilities:
    - Register the blueprints under /api.
    - Translate the error taxonomy into JSON responses.
    - Answer CORS preflights for the configured browser origins.
"""

from datetime import datetime, timezone

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import CORS_ORIGINS, DEBUG, API_TOKEN
from handlers.ai_handler import ai_bp
from handlers.calendar_handler import calendar_bp
from handlers.dashboard_handler import dashboard_bp
from handlers.expense_handler import expense_bp
from handlers.income_handler import income_bp
from handlers.task_handler import task_bp
from security.auth import require_token
from utils.errors import DashboardError, ValidationFailure
from utils.logger import get_logger

logger = get_logger(__name__)

VERSION = "1.0.0"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationFailure)
    def _validation(e: ValidationFailure):
        return jsonify({"success": False, "error": e.messages}), 400

    @app.errorhandler(DashboardError)
    def _dashboard_error(e: DashboardError):
        if e.status_code >= 500:
            logger.error(f"{type(e).__name__}: {e.message}")
        body = {"success": False, "error": e.public_message}
        if DEBUG and e.message != e.public_message:
            body["message"] = e.message
        return jsonify(body), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        error = "Route not found" if e.code == 404 else e.name
        return jsonify({"success": False, "error": error}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        body = {"success": False, "error": "Server Error"}
        if DEBUG:
            body["message"] = str(e)
        return jsonify(body), 500


def _register_cors(app: Flask, origins: list[str]) -> None:
    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return app.response_class(status=204)
        return None

    @app.after_request
    def _cors_headers(response):
        origin = request.headers.get("Origin")
        if origin and origin in origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
            response.headers["Vary"] = "Origin"
        return response


def create_app(api_token: str = API_TOKEN, cors_origins: list[str] | None = None) -> Flask:
    """Build the Flask app. Database initialisation is the caller's job."""
    app = Flask(__name__)
    app.json.sort_keys = False

    _register_cors(app, CORS_ORIGINS if cors_origins is None else cors_origins)
    app.before_request(require_token(api_token))

    if DEBUG:
        @app.before_request
        def _log_request():
            logger.info(f"{request.method} {request.path}")

    for bp in (task_bp, expense_bp, income_bp, ai_bp, calendar_bp, dashboard_bp):
        app.register_blueprint(bp)

    @app.get("/api/health")
    def health():
        return jsonify({
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.get("/")
    def index():
        return jsonify({
            "message": "Smart Dashboard API",
            "version": VERSION,
            "endpoints": {
                "tasks": "/api/tasks",
                "expenses": "/api/expenses",
                "income": "/api/income",
                "transactions": "/api/transactions",
                "stats": "/api/stats/monthly",
                "calendar": "/api/calendar/events",
                "health": "/api/health",
                "ai": "/api/ai/analyze",
            },
        })

    _register_error_handlers(app)
    return app
