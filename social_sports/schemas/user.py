"""Pydantic schemas for Users, profiles and login."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator

from social_sports.schemas.base import CamelModel, coerce_id
from social_sports.schemas.event import SportType


class User(CamelModel):
    """The authenticated user, held for the session only."""

    id: str = Field(validation_alias=AliasChoices("id", "userId"))
    name: str = ""
    email: str = ""
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return coerce_id(value)


class UserProfile(CamelModel):
    user_id: str = Field(validation_alias=AliasChoices("userId", "id"))
    name: str = ""
    email: Optional[str] = None
    phone_number: Optional[str] = None
    whatsapp_linked: bool = False
    favorite_locations: list[str] = []
    favorite_sports: list[SportType] = []
    preferred_skill_level: Optional[int] = None
    created_at: Optional[datetime] = None
    is_premium: bool = False

    @field_validator("user_id", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> Any:
        return coerce_id(value)


class UserProfileUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    favorite_locations: Optional[list[str]] = None
    favorite_sports: Optional[list[SportType]] = None
    preferred_skill_level: Optional[int] = None


class UserRegistrationRequest(CamelModel):
    name: str
    email: str
    password: str
    phone_number: Optional[str] = None


class LoginCredentials(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    """Login/registration reply: ``{token, user}`` or ``{token, userId}``."""

    token: Optional[str] = Field(default=None, validation_alias=AliasChoices("token", "access_token", "jwt"))
    user: Optional[User] = None
    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("userId", "id"))

    @field_validator("user_id", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> Any:
        return coerce_id(value)

    def resolve_user(self, email: str, name: str = "") -> Optional[User]:
        """Return the full user, or a minimal one built from ``user_id``."""
        if self.user is not None:
            return self.user
        if self.user_id:
            return User(
                id=self.user_id,
                name=name,
                email=email,
                created_at=datetime.now(timezone.utc),
            )
        return None
