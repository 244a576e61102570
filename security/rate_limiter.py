"""
security/rate_limiter.py
-------------------------
Rate limiting for the endpoints that call paid or slow remote services.
Limits the number of requests a client can make within a time window.
"""

import threading
import time
from collections import defaultdict
from functools import wraps
from typing import Callable

from flask import jsonify, request

from config import RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

# In-memory storage for rate tracking: {client: [timestamp1, timestamp2, ...]}
_client_timestamps: dict[str, list[float]] = defaultdict(list)
_lock = threading.Lock()


def _cleanup(window: float) -> None:
    """Drop expired timestamps, and forget clients with none left."""
    cutoff = time.time() - window
    for client in list(_client_timestamps):
        recent = [t for t in _client_timestamps[client] if t > cutoff]
        if recent:
            _client_timestamps[client] = recent
        else:
            del _client_timestamps[client]


def reset() -> None:
    """Forget every recorded request."""
    with _lock:
        _client_timestamps.clear()


def rate_limited(func: Callable):
    """
    Decorator that enforces rate limiting per client address.

    Configuration (via .env):
        RATE_LIMIT_REQUESTS: Max requests per window (default: 10).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).

    Behavior:
        - Tracks request timestamps per client and endpoint.
        - If exceeded, answers 429 without calling the view.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        client = f"{request.remote_addr}:{request.endpoint}"
        with _lock:
            _cleanup(RATE_LIMIT_WINDOW_SECONDS)
            if len(_client_timestamps.get(client, ())) >= RATE_LIMIT_REQUESTS:
                logger.warning(f"⚠️ Rate limit hit for {client}")
                return jsonify({
                    "success": False,
                    "error": "Too many requests. Please wait and try again.",
                }), 429
            _client_timestamps[client].append(time.time())
        return func(*args, **kwargs)

    return wrapper
