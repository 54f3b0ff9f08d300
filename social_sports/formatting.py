"""Display helpers for event cards: dates, skill stars and status labels."""
import logging
from datetime import datetime
from typing import Any, Optional, Union

import pytz
from pydantic import TypeAdapter

from social_sports.config import settings
from social_sports.schemas.event import EventStatus, normalize_status

logger = logging.getLogger(__name__)

# Fixed English names so output does not depend on the process locale.
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

SKILL_SLOTS = 5
FILLED_STAR = "★"
EMPTY_STAR = "☆"

STATUS_LABELS = {
    EventStatus.active: "Active",
    EventStatus.cancelled: "Cancelled",
    EventStatus.completed: "Completed",
    EventStatus.pending: "Pending",
}


_DATETIME = TypeAdapter(datetime)


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 string, datetime or Unix timestamp; naive values are taken as UTC.

    Raises ``ValueError`` (pydantic's ``ValidationError``) for anything else.
    """
    value = _DATETIME.validate_python(value.strip() if isinstance(value, str) else value)
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value


def format_event_date(value: Union[str, datetime, int, None], tz: Optional[str] = None) -> str:
    """Render like ``Fri, Jun 7, 3:00 PM`` in ``tz`` (default SOCIAL_SPORTS_DISPLAY_TIMEZONE)."""
    if value is None or value == "":
        return "Date not specified"
    try:
        moment = parse_datetime(value)
    except ValueError:
        logger.warning("Cannot format date %r", value)
        return "Invalid date"

    local = moment.astimezone(pytz.timezone(tz or settings.DISPLAY_TIMEZONE))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{WEEKDAYS[local.weekday()]}, {MONTHS[local.month - 1]} {local.day}, "
        f"{hour}:{local.minute:02d} {meridiem}"
    )


def skill_indicator(level: int, slots: int = SKILL_SLOTS) -> tuple[int, int]:
    """(filled, empty) slot counts; out-of-range levels are clamped."""
    filled = max(0, min(slots, int(level or 0)))
    return filled, slots - filled


def render_skill_stars(level: int, slots: int = SKILL_SLOTS) -> str:
    filled, empty = skill_indicator(level, slots)
    return FILLED_STAR * filled + EMPTY_STAR * empty


def status_label(status: Union[EventStatus, str]) -> str:
    return STATUS_LABELS[normalize_status(status)]
