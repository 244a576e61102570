"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Application ───────────────────────────────────────────
APP_ENV: str = os.getenv("APP_ENV", "production")
DEBUG: bool = APP_ENV == "development"
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "5000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

_raw_origins = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:3001,http://localhost:3002,http://localhost:3003",
)
CORS_ORIGINS: list[str] = [o.strip() for o in _raw_origins.split(",") if o.strip()]

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "smart_dashboard")
DB_USER: str = os.getenv("DB_USER", "dashboard_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# ── Dashboard ─────────────────────────────────────────────
MONTHLY_BUDGET: float = float(os.getenv("MONTHLY_BUDGET", "5000"))
TASKS_PER_PAGE: int = int(os.getenv("TASKS_PER_PAGE", "5"))

# ── Gemini AI ─────────────────────────────────────────────
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# ── Google Calendar ───────────────────────────────────────
GOOGLE_CALENDAR_ID: str = os.getenv("GOOGLE_CALENDAR_ID", os.getenv("CALENDAR_ID", "primary"))
GOOGLE_TOKEN_PATH: str = os.getenv("GOOGLE_TOKEN_PATH", "token.json")
CALENDAR_SYNC_TIMEOUT_SECONDS: float = float(os.getenv("CALENDAR_SYNC_TIMEOUT_SECONDS", "60"))

# ── Security ──────────────────────────────────────────────
API_TOKEN: str = os.getenv("API_TOKEN", "")

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "10"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# ── Client ────────────────────────────────────────────────
API_BASE_URL: str = os.getenv("API_BASE_URL", f"http://localhost:{PORT}/api")
API_TIMEOUT_SECONDS: float = float(os.getenv("API_TIMEOUT_SECONDS", "30"))
SETTINGS_PATH: str = os.getenv(
    "SETTINGS_PATH",
    os.path.join(os.path.expanduser("~"), ".smart_dashboard", "settings.json"),
)

# ── Currency ──────────────────────────────────────────────
CURRENCY_SYMBOL: str = "$"
