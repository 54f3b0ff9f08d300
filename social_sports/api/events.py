"""Event endpoints: list, fetch, create, join, leave, cancel, parse."""
import logging
from typing import Any, Optional, Union

from social_sports.api.base import build_request, parse, parse_list
from social_sports.client import ApiClient
from social_sports.errors import ClientValidationError
from social_sports.schemas.event import (
    CancelEventRequest,
    Event,
    EventRequest,
    JoinEventRequest,
    ParsedEvent,
    ParseEventRequest,
)

logger = logging.getLogger(__name__)

# Older backends exposed the personalised list under different paths.
MY_EVENTS_ENDPOINTS = ("/events/my-events", "/events/user", "/users/me/events")

# Backend variants disagree on the verb for cancellation; POST is what the
# shared client and the cancel button both send.
CANCEL_METHOD = "POST"


async def list_events(client: ApiClient) -> list[Event]:
    return parse_list(Event, await client.request("/events"))


async def list_my_events(client: ApiClient) -> list[Event]:
    """Events the current user created or joined."""
    return parse_list(Event, await client.request_first(MY_EVENTS_ENDPOINTS))


async def get_event(client: ApiClient, event_id: str) -> Event:
    return parse(Event, await client.request(f"/events/{event_id}"))


async def create_event(client: ApiClient, payload: Union[EventRequest, dict[str, Any]]) -> Event:
    payload = build_request(EventRequest, payload)
    event = parse(Event, await client.request("/events", "POST", payload))
    logger.info("Created %s event %s at %s", event.sport.value, event.event_id, event.location)
    return event


async def join_event(client: ApiClient, event_id: str, join_request: JoinEventRequest) -> Event:
    if not join_request.user_name.strip():
        raise ClientValidationError("Please enter your name to join this event")
    return parse(Event, await client.request(f"/events/{event_id}/join", "POST", join_request))


async def leave_event(client: ApiClient, event_id: str, user_id: str) -> Event:
    return parse(Event, await client.request(f"/events/{event_id}/leave/{user_id}", "DELETE"))


async def cancel_event(client: ApiClient, event_id: str, reason: Optional[str] = None) -> Event:
    """Cancel an event (creator only)."""
    data = await client.request(
        f"/events/{event_id}/cancel", CANCEL_METHOD, CancelEventRequest(reason=reason)
    )
    logger.info("Cancelled event %s (reason: %s)", event_id, reason)
    return parse(Event, data)


async def parse_event_description(client: ApiClient, message: str) -> ParsedEvent:
    """Have the backend extract event details from a natural-language message."""
    if not message or not message.strip():
        raise ClientValidationError("Please enter a description of your event")
    data = await client.request(
        "/events/parse", "POST", ParseEventRequest(message=message), requires_auth=False
    )
    return parse(ParsedEvent, data)


async def list_sport_types(client: ApiClient) -> list[str]:
    data = await client.request("/events/sport-types", requires_auth=False)
    return [str(item) for item in data or []]
