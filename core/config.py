"""Application settings read from the environment.

Values are loaded once at import time; a local `.env` file is honoured for
development. Every setting has a default suitable for running the API and the
test-suite against SQLite without an LLM key.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _float(name: str, default: float) -> float:
    return float(os.getenv(name, default))


def _int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


APP_NAME = "FitForge Coaching API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

# Read/Write partitioning: point READ_DATABASE_URL at a replica in production.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///fitforge.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
AI_TEMPERATURE = _float("AI_TEMPERATURE", 0.7)
AI_MAX_TOKENS = _int("AI_MAX_TOKENS", 4000)
AI_TIMEOUT_SECONDS = _float("AI_TIMEOUT_SECONDS", 30.0)
AI_HEALTH_TIMEOUT_SECONDS = _float("AI_HEALTH_TIMEOUT_SECONDS", 5.0)
CHAT_TEMPERATURE = _float("CHAT_TEMPERATURE", 0.8)
CHAT_MAX_TOKENS = _int("CHAT_MAX_TOKENS", 300)

PLAN_CACHE_TTL_SECONDS = _int("PLAN_CACHE_TTL_SECONDS", 24 * 60 * 60)
JOB_ESTIMATED_COMPLETION_SECONDS = _int("JOB_ESTIMATED_COMPLETION_SECONDS", 60)

PHOTO_STORAGE_DIR = os.getenv(
    "PHOTO_STORAGE_DIR",
    os.path.join(os.path.dirname(__file__), "..", "storage", "photos"),
)

LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
