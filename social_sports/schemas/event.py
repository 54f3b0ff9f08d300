"""Pydantic schemas for Events and their participants."""
from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, field_validator

from social_sports.schemas.base import CamelModel, coerce_id

logger = logging.getLogger(__name__)


class SportType(str, enum.Enum):
    PADEL = "PADEL"
    TENNIS = "TENNIS"
    FOOTBALL = "FOOTBALL"
    BASKETBALL = "BASKETBALL"
    VOLLEYBALL = "VOLLEYBALL"
    HOCKEY = "HOCKEY"
    BADMINTON = "BADMINTON"
    CYCLING = "CYCLING"
    RUNNING = "RUNNING"


CORE_SPORT_TYPES = (
    SportType.PADEL,
    SportType.TENNIS,
    SportType.FOOTBALL,
    SportType.BASKETBALL,
    SportType.VOLLEYBALL,
)


class EventStatus(str, enum.Enum):
    active = "ACTIVE"
    cancelled = "CANCELLED"
    completed = "COMPLETED"
    pending = "PENDING"


class ParticipantStatus(str, enum.Enum):
    confirmed = "CONFIRMED"
    pending = "PENDING"
    cancelled = "CANCELLED"


# Raw backend status strings, compared upper-cased.
STATUS_ALIASES: dict[str, EventStatus] = {
    "ACTIVE": EventStatus.active,
    "CONFIRMED": EventStatus.active,
    "OPEN": EventStatus.active,
    "FULL": EventStatus.active,
    "CANCELLED": EventStatus.cancelled,
    "CANCELED": EventStatus.cancelled,
    "COMPLETED": EventStatus.completed,
    "PENDING": EventStatus.pending,
    "PROPOSED": EventStatus.pending,
}


def normalize_status(raw: Any) -> EventStatus:
    """Resolve any backend spelling of an event status to an ``EventStatus``."""
    if isinstance(raw, EventStatus):
        return raw
    key = str(raw or "").strip().upper()
    status = STATUS_ALIASES.get(key)
    if status is None:
        logger.warning("Unknown event status %r, treating as pending", raw)
        return EventStatus.pending
    return status


def _upper(value: Any) -> Any:
    return value.strip().upper() if isinstance(value, str) else value


class Participant(CamelModel):
    user_id: str
    name: str = ""
    phone_number: Optional[str] = None
    joined_at: Optional[datetime] = None
    status: ParticipantStatus = ParticipantStatus.confirmed

    @field_validator("user_id", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, value: Any) -> Any:
        return _upper(value)


class Event(CamelModel):
    event_id: str
    sport: SportType
    location: str
    date: datetime
    max_players: int
    current_players: int = 0
    skill_level: int
    status: EventStatus = EventStatus.pending
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    booking_url: Optional[str] = None
    whatsapp_group_link: Optional[str] = None
    participants: list[Participant] = []
    participant_phone_numbers: list[str] = []

    @field_validator("event_id", "created_by", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("sport", mode="before")
    @classmethod
    def _upper_sport(cls, value: Any) -> Any:
        return _upper(value)

    @field_validator("date", "created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> EventStatus:
        return normalize_status(value)

    @property
    def active_participants(self) -> list[Participant]:
        """Participants shown on the roster (cancelled ones are hidden)."""
        return [p for p in self.participants if p.status != ParticipantStatus.cancelled]

    @property
    def is_full(self) -> bool:
        return self.current_players >= self.max_players

    @property
    def is_cancelled(self) -> bool:
        return self.status == EventStatus.cancelled

    def has_participant(self, user_id: str) -> bool:
        """True if ``user_id`` is on the roster or in the legacy participant id list."""
        if user_id in self.participant_phone_numbers:
            return True
        return any(p.user_id == user_id for p in self.participants)


class EventRequest(CamelModel):
    sport: SportType
    location: str
    date: datetime
    max_players: int
    skill_level: int
    creator_name: str
    booking_url: Optional[str] = None
    creator_phone: Optional[str] = None


class JoinEventRequest(CamelModel):
    user_name: str
    user_phone: Optional[str] = None


class CancelEventRequest(CamelModel):
    reason: Optional[str] = None


class ParseEventRequest(CamelModel):
    message: str


class ParsedEvent(CamelModel):
    """Event details extracted by the backend from a natural-language message."""

    sport_type: SportType
    location: str
    time: datetime
    player_count: int = Field(ge=0)

    @field_validator("sport_type", mode="before")
    @classmethod
    def _upper_sport(cls, value: Any) -> Any:
        return _upper(value)

    def to_event_request(
        self,
        creator_name: str,
        creator_phone: Optional[str] = None,
        skill_level: int = 3,
    ) -> EventRequest:
        # player_count excludes the creator
        return EventRequest(
            sport=self.sport_type,
            location=self.location,
            date=self.time,
            max_players=self.player_count + 1,
            skill_level=skill_level,
            creator_name=creator_name or "Anonymous",
            creator_phone=creator_phone,
        )
