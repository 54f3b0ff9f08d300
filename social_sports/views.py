"""View-models for the events listing and my-events pages.

These are the only places that substitute demo data when the backend is
unreachable. They also own the page-level filtering (sport, day window,
free-text search) and the upcoming/past split.
"""
import enum
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytz
from pydantic import BaseModel

from social_sports.auth import AuthProvider
from social_sports.client import ApiClient
from social_sports.config import settings
from social_sports.fallback import demo_events, my_demo_events
from social_sports.hooks.events import EventsQuery, MyEventsQuery
from social_sports.schemas.event import Event, EventStatus

logger = logging.getLogger(__name__)

FETCH_MY_EVENTS_ERROR = "Failed to fetch your events. Using demo data instead."
REFRESH_MY_EVENTS_ERROR = "Failed to refresh events. Using demo data instead."

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DateFilter(str, enum.Enum):
    today = "today"
    tomorrow = "tomorrow"
    this_week = "this_week"


class EventFilters(BaseModel):
    sport: Optional[str] = None
    date_filter: Optional[DateFilter] = None
    search: str = ""


def _matches_date(event: Event, date_filter: DateFilter, now: datetime, tz: pytz.BaseTzInfo) -> bool:
    today = now.astimezone(tz).date()
    event_day = event.date.astimezone(tz).date()
    if date_filter == DateFilter.today:
        return event_day == today
    if date_filter == DateFilter.tomorrow:
        return event_day == today + timedelta(days=1)
    return today <= event_day < today + timedelta(days=7)


def filter_events(
    events: list[Event],
    filters: EventFilters,
    now: Optional[datetime] = None,
    tz: Optional[str] = None,
) -> list[Event]:
    now = now or utcnow()
    zone = pytz.timezone(tz or settings.DISPLAY_TIMEZONE)
    result = list(events)
    if filters.sport:
        result = [e for e in result if e.sport.value == filters.sport.upper()]
    if filters.date_filter:
        result = [e for e in result if _matches_date(e, filters.date_filter, now, zone)]
    term = filters.search.strip().lower()
    if term:
        result = [e for e in result if term in e.location.lower() or term in e.sport.value.lower()]
    return result


def available_sports(events: list[Event]) -> list[str]:
    """Distinct sports in first-seen order, for the sport filter."""
    seen: list[str] = []
    for event in events:
        if event.sport.value not in seen:
            seen.append(event.sport.value)
    return seen


def split_upcoming_past(events: list[Event], now: Optional[datetime] = None) -> tuple[list[Event], list[Event]]:
    now = now or utcnow()
    upcoming = [e for e in events if e.date >= now and not e.is_cancelled]
    past = [e for e in events if e.date < now or e.is_cancelled]
    return upcoming, past


def can_join(event: Event) -> bool:
    return event.status == EventStatus.active and not event.is_full


class EventsPage:
    """All-events listing; falls back to demo events on any fetch failure."""

    def __init__(self, client: ApiClient, clock: Clock = utcnow):
        self.query = EventsQuery(client)
        self.clock = clock
        self.events: list[Event] = []
        self.filters = EventFilters()
        self.using_demo_data = False

    async def load(self) -> None:
        await self.query.refetch()
        if self.query.error is not None:
            logger.warning("Error fetching events, using demo data instead: %s", self.query.error)
            self.events = demo_events(self.clock())
            self.using_demo_data = True
        else:
            self.events = self.query.events
            self.using_demo_data = False

    @property
    def loading(self) -> bool:
        return self.query.loading

    @property
    def available_sports(self) -> list[str]:
        return available_sports(self.events)

    def set_filters(self, **changes) -> None:
        self.filters = EventFilters.model_validate({**self.filters.model_dump(), **changes})

    @property
    def filtered_events(self) -> list[Event]:
        return filter_events(self.events, self.filters, now=self.clock())

    def close(self) -> None:
        self.query.unmount()


class MyEventsPage:
    """The signed-in user's events, split into upcoming and past."""

    def __init__(self, client: ApiClient, auth: AuthProvider, clock: Clock = utcnow):
        self.query = MyEventsQuery(client)
        self.auth = auth
        self.clock = clock
        self.events: list[Event] = []
        self.error: Optional[str] = None
        self.using_demo_data = False

    async def load(self) -> None:
        if not self.auth.is_authenticated:
            return
        await self._load(FETCH_MY_EVENTS_ERROR)

    async def refresh(self) -> None:
        await self._load(REFRESH_MY_EVENTS_ERROR)

    async def _load(self, failure_message: str) -> None:
        self.error = None
        await self.query.refetch()
        if self.query.error is not None:
            logger.warning("Error fetching your events: %s", self.query.error)
            self.error = failure_message
            user = self.auth.user
            self.events = my_demo_events(user.id if user else None, self.clock())
            self.using_demo_data = True
        else:
            self.events = self.query.events
            self.using_demo_data = False

    @property
    def loading(self) -> bool:
        return self.query.loading

    @property
    def upcoming_events(self) -> list[Event]:
        return split_upcoming_past(self.events, self.clock())[0]

    @property
    def past_events(self) -> list[Event]:
        return split_upcoming_past(self.events, self.clock())[1]

    def close(self) -> None:
        self.query.unmount()
