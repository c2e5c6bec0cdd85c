"""Process-local memoization of generated plans.

Entries are keyed by a deterministic encoding of the intake fields that shape
a plan and expire after a fixed TTL (24 hours by default). Staleness is only
checked on lookup; there is no size bound, no background sweep and no
persistence across restarts.
"""

import base64
import json
import time
from typing import Any, Callable, Dict, List, Optional

from core import config
from core.logger import get_logger

logger = get_logger("services.plan_cache")


def _values(items) -> List[str]:
    return sorted(getattr(i, "value", i) for i in (items or []))


def _scalar(value):
    return getattr(value, "value", value)


def make_cache_key(intake) -> str:
    """Encode the plan-relevant intake fields as a base64 string.

    List fields are sorted into new lists, so ordering on the form does not
    matter and the caller's lists are left untouched. `intake` may be an
    object with attributes or a plain dict.
    """
    get = intake.get if isinstance(intake, dict) else (lambda k: getattr(intake, k, None))
    key_data = {
        "age": get("age"),
        "sex": _scalar(get("sex")),
        "weight": get("weight_kg"),
        "height": get("height_cm"),
        "goal": _scalar(get("primary_goal")),
        "activity": _scalar(get("activity_level")),
        "training": _values(get("training_styles")),
        "equipment": _values(get("equipment")),
        "diet": _values(get("diet_preferences")),
        "days": get("days_per_week"),
        "duration": get("session_minutes"),
    }
    raw = json.dumps(key_data, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class PlanCache:
    """TTL map of cache key -> {"data": ..., "timestamp": seconds}."""

    def __init__(self, ttl_seconds: int = config.PLAN_CACHE_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry["timestamp"] >= self.ttl_seconds:
            logger.debug("Plan cache entry expired")
            del self._entries[key]
            return None
        return entry["data"]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = {"data": value, "timestamp": self._clock()}

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        return {"size": len(self._entries), "keys": list(self._entries.keys())}

    def __len__(self) -> int:
        return len(self._entries)
