"""
Scheduled-publication timestamps.

Editors enter a scheduled publication time as a local wall-clock value
(``2025-03-01T09:30``). Before submission it is qualified with the local
timezone so the server receives an unambiguous instant. Values that do not
parse are passed through untouched; nothing here validates that the time is
in the future.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

SCHEDULED = "scheduled"


def to_zoned_timestamp(value: Any, tz: tzinfo | None = None) -> Any:
    """
    Convert a local wall-clock datetime into an ISO-8601 string with offset.

    Args:
        value: ``datetime`` or string such as "2025-03-01T09:30" / "2025-03-01 09:30"
        tz: Zone for naive values; ``None`` means the system local zone

    Returns:
        The zoned ISO string, or ``value`` unchanged if it cannot be parsed
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value.strip().replace(" ", "T", 1))
        except ValueError:
            logger.debug(f"Leaving unparseable schedule value as-is: {value!r}")
            return value
    else:
        return value

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz) if tz is not None else moment.astimezone()
    return moment.isoformat()


def localize_schedule(payload: dict[str, Any], tz: tzinfo | None = None) -> dict[str, Any]:
    """Qualify ``published_at`` when the payload schedules publication."""
    status = payload.get("status")
    if isinstance(status, Enum):
        status = status.value
    if status != SCHEDULED or not payload.get("published_at"):
        return payload
    return {**payload, "published_at": to_zoned_timestamp(payload["published_at"], tz)}
