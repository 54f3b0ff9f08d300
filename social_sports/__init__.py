"""Client-side data layer for the Social Sports REST backend."""
from social_sports.auth import AuthProvider  # noqa: F401
from social_sports.client import ApiClient  # noqa: F401
from social_sports.errors import (  # noqa: F401
    ApiError,
    AuthenticationRequiredError,
    ClientValidationError,
    NetworkError,
)
from social_sports.session import FileTokenStore, MemoryTokenStore, Session  # noqa: F401

__version__ = "0.1.0"
