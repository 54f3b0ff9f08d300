"""Demo events shown when the backend cannot be reached.

These are pure functions: no network access, fixed shapes, dates offset from
``now``. Only the events pages substitute them; the shared queries never do.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from social_sports.schemas.event import Event, EventStatus, SportType

UNKNOWN_USER_ID = "unknown-user"


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def demo_events(now: Optional[datetime] = None) -> list[Event]:
    """Placeholder listing for the all-events page."""
    now = _now(now)
    return [
        Event(
            event_id="demo-1",
            sport=SportType.PADEL,
            location="Padel City Amsterdam",
            date=now + timedelta(days=1),
            current_players=2,
            max_players=4,
            skill_level=3,
            status=EventStatus.active,
            created_by="demo-user",
            whatsapp_group_link="https://chat.whatsapp.com/example1",
        ),
        Event(
            event_id="demo-2",
            sport=SportType.TENNIS,
            location="Tennis Park West",
            date=now + timedelta(days=2),
            current_players=1,
            max_players=4,
            skill_level=2,
            status=EventStatus.active,
            created_by="demo-user",
        ),
        Event(
            event_id="demo-3",
            sport=SportType.FOOTBALL,
            location="Sportpark Sloten",
            date=now + timedelta(days=3),
            current_players=8,
            max_players=10,
            skill_level=4,
            status=EventStatus.active,
            created_by="demo-user",
        ),
    ]


def my_demo_events(user_id: Optional[str], now: Optional[datetime] = None) -> list[Event]:
    """Placeholder listing for the my-events page, personalised to ``user_id``."""
    now = _now(now)
    user_id = user_id or UNKNOWN_USER_ID
    pool = [
        Event(
            event_id="my-event-1",
            sport=SportType.PADEL,
            location="Padel City Amsterdam",
            date=now + timedelta(days=1),
            current_players=4,
            max_players=4,
            skill_level=3,
            status="CONFIRMED",
            created_by=user_id,
            whatsapp_group_link="https://chat.whatsapp.com/example1",
            participant_phone_numbers=[user_id, "other-user-1", "other-user-2", "other-user-3"],
        ),
        Event(
            event_id="my-event-2",
            sport=SportType.TENNIS,
            location="Tennis Park East",
            date=now + timedelta(days=5),
            current_players=3,
            max_players=4,
            skill_level=4,
            status="OPEN",
            created_by="other-user-1",
            participant_phone_numbers=[user_id, "other-user-1", "other-user-3"],
        ),
        Event(
            event_id="my-event-3",
            sport=SportType.FOOTBALL,
            location="Soccer Field Central",
            date=now - timedelta(days=1),
            current_players=11,
            max_players=11,
            skill_level=2,
            status="COMPLETED",
            created_by="other-user-2",
            participant_phone_numbers=[user_id, "other-user-1", "other-user-2", "other-user-3"],
        ),
        Event(
            event_id="not-my-event-1",
            sport=SportType.BASKETBALL,
            location="Downtown Courts",
            date=now + timedelta(days=2),
            current_players=6,
            max_players=10,
            skill_level=3,
            status="OPEN",
            created_by="other-user-4",
            participant_phone_numbers=["other-user-1", "other-user-2", "other-user-4"],
        ),
    ]
    return [event for event in pool if event.has_participant(user_id)]
