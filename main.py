"""
main.py
-------
Entry point for the Smart Dashboard API server.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the Flask application and serve it.
    - Terminate the process if the record store cannot be reached.
"""

import sys

from config import APP_ENV, DEBUG, HOST, PORT
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from server import create_app
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Initialize and run the server."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    try:
        init_pool()
        create_tables()
    except Exception as e:
        logger.critical(f"❌ Cannot reach the record store: {e}")
        sys.exit(1)

    # ── 2. Build the Flask application ────────────────────
    app = create_app()

    # ── 3. Serve ──────────────────────────────────────────
    logger.info(f"🚀 Server running in {APP_ENV} mode on http://{HOST}:{PORT}")
    logger.info(f"📡 API: http://localhost:{PORT}/api")
    try:
        app.run(host=HOST, port=PORT, debug=DEBUG, use_reloader=False, threaded=True)
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        close_pool()
        logger.info("Smart Dashboard API stopped.")


if __name__ == "__main__":
    main()
