"""
security/auth.py
-----------------
Authentication guard for the HTTP API.
Blocks requests that do not present the configured bearer token.
"""

import hmac

from flask import jsonify, request

from config import API_TOKEN
from utils.logger import get_logger

logger = get_logger(__name__)

_OPEN_PATHS = ("/api/health",)


def require_token(token: str = API_TOKEN):
    """
    Build a ``before_request`` hook enforcing ``Authorization: Bearer <token>``.

    Behavior:
        - If the token is empty, ALL requests are allowed (dev mode).
        - CORS preflight and the health check are always allowed.
        - Failed attempts are logged and answered with 401.
    """
    def guard():
        if not token or request.method == "OPTIONS" or request.path in _OPEN_PATHS:
            return None
        supplied = request.headers.get("Authorization", "")
        scheme, _, value = supplied.partition(" ")
        if scheme.lower() == "bearer" and hmac.compare_digest(value.strip(), token):
            return None
        logger.warning(f"🚫 Unauthorized request: {request.method} {request.path} from {request.remote_addr}")
        return jsonify({"success": False, "error": "Unauthorized"}), 401

    return guard
