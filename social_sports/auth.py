"""Authentication provider: login, registration, logout and token restore.

Owns the ``Session`` shared with the transport layer. Failures are reported
through ``error`` (a user-facing string) and a ``False`` return value rather
than by raising, so callers can render the message directly.
"""
import logging
from typing import Optional, Sequence

from social_sports.api import users as users_api
from social_sports.client import ApiClient
from social_sports.errors import ApiError, AuthenticationRequiredError, ClientValidationError, NetworkError
from social_sports.schemas.user import LoginCredentials, LoginResponse, User, UserRegistrationRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password. Please try again."
NETWORK_ERROR_MESSAGE = "Network error or server unavailable. Please try again later."


class AuthProvider:
    def __init__(self, client: ApiClient, registration_endpoints: Optional[Sequence[str]] = None):
        self.client = client
        self.session = client.session
        self.registration_endpoints = registration_endpoints
        self.loading = False
        self.error: Optional[str] = None

    @property
    def user(self) -> Optional[User]:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def clear_error(self) -> None:
        self.error = None

    async def restore(self) -> bool:
        """Validate a persisted token by loading the current user."""
        if not self.session.token:
            return False
        self.loading = True
        try:
            user = await users_api.get_current_user(self.client)
        except ApiError as exc:
            logger.warning("Stored token could not be validated: %s", exc)
            self.session.end()
            return False
        finally:
            self.loading = False
        self.session.user = user
        logger.info("Restored session for user %s", user.id)
        return True

    def _start_session(self, result: LoginResponse, email: str, name: str = "") -> None:
        user = result.resolve_user(email, name=name)
        self.session.start(result.token, user)

    async def login(self, email: str, password: str) -> bool:
        self.loading = True
        self.error = None
        try:
            result = await users_api.login_user(
                self.client, LoginCredentials(email=email, password=password)
            )
        except AuthenticationRequiredError:
            self.error = INVALID_CREDENTIALS_MESSAGE
            return False
        except NetworkError as exc:
            logger.error("Login error: %s", exc)
            self.error = NETWORK_ERROR_MESSAGE
            return False
        except ApiError as exc:
            logger.error("Login failed: %s", exc.message)
            self.error = exc.message
            return False
        finally:
            self.loading = False
        self._start_session(result, email)
        return True

    async def register(self, name: str, email: str, password: str) -> bool:
        """Register, then keep the returned token or fall back to logging in."""
        self.loading = True
        self.error = None
        try:
            result = await users_api.register_user(
                self.client,
                UserRegistrationRequest(name=name, email=email, password=password),
                endpoints=self.registration_endpoints,
            )
        except ClientValidationError as exc:
            self.error = exc.message
            return False
        except ApiError as exc:
            logger.error("Registration error: %s", exc)
            self.error = exc.message or "Registration failed. Please try again later."
            return False
        finally:
            self.loading = False

        if result.token:
            self._start_session(result, email, name=name)
            return True
        return await self.login(email, password)

    def logout(self) -> None:
        self.session.end()
        self.error = None
