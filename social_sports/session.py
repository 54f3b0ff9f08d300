"""Session state: the persisted bearer token plus the session-scoped user.

The token is the only value the client persists. It is written on login or
registration and removed on logout or when the backend answers 401. The user
object lives in memory for the lifetime of the ``Session`` only.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from social_sports.config import settings
from social_sports.schemas.user import User

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class TokenStore(Protocol):
    def load(self) -> Optional[str]: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Process-local token storage (tests, short-lived scripts)."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Token persisted as ``{"token": ...}`` in a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(os.path.expanduser(path or settings.TOKEN_FILE))

    def load(self) -> Optional[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token file %s", self.path)
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class Session:
    """Explicit session object handed to the transport layer."""

    def __init__(self, store: Optional[TokenStore] = None):
        self.store: TokenStore = store if store is not None else MemoryTokenStore()
        self.user: Optional[User] = None

    @property
    def token(self) -> Optional[str]:
        return self.store.load()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    def start(self, token: str, user: Optional[User] = None) -> None:
        """Begin a session after a successful login or registration."""
        self.store.save(token)
        self.user = user
        logger.info("Session started for user %s", user.id if user else "<unknown>")

    def end(self) -> None:
        """Logout: forget the token and the user."""
        self.store.clear()
        self.user = None
        logger.info("Session ended")

    def invalidate(self) -> None:
        """The backend rejected the token (401)."""
        logger.warning("Session token rejected by backend, clearing it")
        self.store.clear()
        self.user = None
