"""
Event lifecycle classification.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

Timestamp = Union[str, datetime, None]


class EventPhase(str, Enum):
    """Lifecycle phase shown on the event status badge."""
    UPCOMING = "Upcoming"
    ONGOING = "Ongoing"
    ENDED = "Ended"


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Parse an ISO-8601 string or datetime into an aware UTC datetime.

    Args:
        value: The value to parse. Naive values are taken as UTC.

    Returns:
        datetime: The parsed datetime, or None if invalid.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def compute_event_status(start_time: Timestamp, end_time: Timestamp, now: Timestamp = None) -> EventPhase:
    """
    Classify an event as Upcoming, Ongoing or Ended relative to now.

    Unparsable start or end times classify as Upcoming. Both bounds of the
    [start, end] window count as Ongoing.
    """
    start = parse_timestamp(start_time)
    end = parse_timestamp(end_time)
    if start is None or end is None:
        return EventPhase.UPCOMING

    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    if current is None:
        current = datetime.now(timezone.utc)

    if start <= current <= end:
        return EventPhase.ONGOING
    if current > end:
        return EventPhase.ENDED
    return EventPhase.UPCOMING
