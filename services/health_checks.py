"""Dependency probes used by the `/health` endpoint.

Each probe reports "up", "down" or "unknown" (not configured). The overall
status is healthy when everything is up, degraded when nothing is down but
something is unknown, and unhealthy as soon as anything is down.
"""

import os
from typing import Dict

from sqlalchemy import text
from sqlalchemy.orm import Session

from core import config
from core.logger import get_logger
from services.llm_client import LLMClient

logger = get_logger("services.health_checks")

STATUS_CODES = {"healthy": 200, "degraded": 207, "unhealthy": 503}


def check_database(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
        return "up"
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        return "down"


def check_ai_service(llm: LLMClient) -> str:
    if not llm.configured:
        return "unknown"
    return "up" if llm.ping() else "down"


def check_storage(path: str = None) -> str:
    path = path if path is not None else config.PHOTO_STORAGE_DIR
    if not path:
        return "unknown"
    if os.path.isdir(path) and os.access(path, os.W_OK):
        return "up"
    return "down"


def overall_status(services: Dict[str, str]) -> str:
    statuses = list(services.values())
    if "down" in statuses:
        return "unhealthy"
    if "unknown" in statuses:
        return "degraded"
    return "healthy"
