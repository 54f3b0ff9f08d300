"""Event queries and mutations."""
import asyncio
import logging
from typing import Any, Optional, Union

from social_sports.api import events as events_api
from social_sports.client import ApiClient
from social_sports.errors import ApiError
from social_sports.hooks.base import Mutation, Query
from social_sports.schemas.event import Event, EventRequest, JoinEventRequest

logger = logging.getLogger(__name__)


class EventsQuery(Query[list[Event]]):
    """All events."""

    description = "events"

    def __init__(self, client: ApiClient):
        super().__init__(client, initial=[])

    @property
    def events(self) -> list[Event]:
        return self.data or []

    async def _fetch(self) -> list[Event]:
        return await events_api.list_events(self.client)


class MyEventsQuery(EventsQuery):
    description = "your events"

    async def _fetch(self) -> list[Event]:
        return await events_api.list_my_events(self.client)


class EventQuery(Query[Event]):
    """A single event; re-fetches whenever the event id changes."""

    def __init__(self, client: ApiClient, event_id: Optional[str]):
        super().__init__(client)
        self.event_id = event_id

    @property
    def description(self) -> str:
        return f"event {self.event_id}"

    @property
    def event(self) -> Optional[Event]:
        return self.data

    def should_fetch(self) -> bool:
        return bool(self.event_id)

    async def _fetch(self) -> Event:
        return await events_api.get_event(self.client, self.event_id)

    def set_event_id(self, event_id: Optional[str]) -> Optional[asyncio.Task]:
        if event_id == self.event_id:
            return None
        self.event_id = event_id
        return self._spawn(self.refetch())


class SportTypesQuery(Query[list[str]]):
    description = "sport types"

    def __init__(self, client: ApiClient):
        super().__init__(client, initial=[])

    @property
    def sport_types(self) -> list[str]:
        return self.data or []

    async def _fetch(self) -> list[str]:
        return await events_api.list_sport_types(self.client)


class CreateEventMutation(Mutation):
    def __init__(self, client: ApiClient):
        super().__init__(client)
        self.created_event: Optional[Event] = None

    async def create_event(self, event_data: Union[EventRequest, dict[str, Any]]) -> Event:
        """Create the event and return it; failures are recorded and re-raised."""
        self._begin()
        try:
            event = await events_api.create_event(self.client, event_data)
        except ApiError as exc:
            logger.error("Error creating event: %s", exc)
            self.error = exc
            raise
        else:
            self.created_event = event
            self.error = None
            return event
        finally:
            self._finish()


class JoinEventMutation(Mutation):
    """Join an event. ``success`` stays true until the next attempt."""

    def __init__(self, client: ApiClient):
        super().__init__(client)
        self.success = False
        self.joined_event: Optional[Event] = None

    async def join_event(self, event_id: str, name: str, phone: Optional[str] = None) -> Optional[Event]:
        self.success = False
        self._begin()
        try:
            event = await events_api.join_event(
                self.client, event_id, JoinEventRequest(user_name=name, user_phone=phone)
            )
        except ApiError as exc:
            logger.error("Error joining event %s: %s", event_id, exc)
            self.error = exc
            return None
        else:
            self.joined_event = event
            self.success = True
            self.error = None
            return event
        finally:
            self._finish()


class CancelEventMutation(Mutation):
    def __init__(self, client: ApiClient):
        super().__init__(client)
        self.success = False
        self.cancelled_event: Optional[Event] = None

    async def cancel_event(self, event_id: str, reason: Optional[str] = None) -> Optional[Event]:
        self.success = False
        self._begin()
        try:
            event = await events_api.cancel_event(self.client, event_id, reason)
        except ApiError as exc:
            logger.error("Error cancelling event %s: %s", event_id, exc)
            self.error = exc
            return None
        else:
            self.cancelled_event = event
            self.success = True
            self.error = None
            return event
        finally:
            self._finish()
