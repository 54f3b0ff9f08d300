"""User endpoints: registration, login and profiles."""
import logging
from typing import Optional, Sequence, Union

from social_sports.api.base import build_request, parse
from social_sports.client import ApiClient
from social_sports.config import settings
from social_sports.errors import ApiError, ClientValidationError
from social_sports.schemas.user import (
    LoginCredentials,
    LoginResponse,
    User,
    UserProfile,
    UserProfileUpdate,
    UserRegistrationRequest,
)

logger = logging.getLogger(__name__)


async def register_user(
    client: ApiClient,
    registration: UserRegistrationRequest,
    endpoints: Optional[Sequence[str]] = None,
) -> LoginResponse:
    """Register against the first candidate endpoint that accepts the request."""
    if not (registration.name.strip() and registration.email.strip() and registration.password):
        raise ClientValidationError("Name, email and password are required")
    candidates = list(endpoints or settings.REGISTRATION_ENDPOINTS)
    data = await client.request_first(candidates, "POST", registration, requires_auth=False)
    logger.info("Registered user %s", registration.email)
    return parse(LoginResponse, data)


async def login_user(client: ApiClient, credentials: Union[LoginCredentials, dict]) -> LoginResponse:
    credentials = build_request(LoginCredentials, credentials)
    if not credentials.email.strip() or not credentials.password:
        raise ClientValidationError("Email and password are required")
    result = parse(LoginResponse, await client.request("/users/login", "POST", credentials, requires_auth=False))
    if not result.token:
        raise ApiError("No token received from the server")
    return result


async def get_current_user(client: ApiClient) -> User:
    return parse(User, await client.request("/users/me"))


async def get_user_profile(client: ApiClient, user_id: str) -> UserProfile:
    return parse(UserProfile, await client.request(f"/users/{user_id}"))


async def update_user_profile(client: ApiClient, user_id: str, update: UserProfileUpdate) -> UserProfile:
    return parse(UserProfile, await client.request(f"/users/{user_id}", "PUT", update))
