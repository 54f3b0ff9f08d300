"""Pytest fixtures: an in-process fake backend reached through httpx's ASGI transport."""
import asyncio
from typing import Callable, Optional

import httpx
import pytest
import pytest_asyncio

from social_sports.client import ApiClient
from social_sports.schemas.user import User
from social_sports.session import MemoryTokenStore, Session
from tests.fake_backend import FakeBackend, create_app

BASE_URL = "http://testserver"


@pytest.fixture
def backend():
    """Fresh backend state for each test."""
    return FakeBackend()


@pytest_asyncio.fixture
async def client(backend):
    """ApiClient wired to the fake backend, with no session token."""
    transport = httpx.ASGITransport(app=create_app(backend))
    async with httpx.AsyncClient(transport=transport) as http:
        yield ApiClient(base_url=BASE_URL, session=Session(MemoryTokenStore()), http=http)


@pytest.fixture
def user(backend):
    return backend.add_user(name="Alice", email="alice@example.com", password="secret")


@pytest_asyncio.fixture
async def authed_client(client, backend, user):
    """ApiClient whose session holds a valid token for ``user``."""
    login_as(client, backend, user)
    return client


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def login_as(client: ApiClient, backend: FakeBackend, user: dict) -> str:
    """Start a session for ``user`` without going through /users/login."""
    token = backend.issue_token(user["id"])
    client.session.start(token, User.model_validate(user))
    return token


def make_client(handler: Callable[[httpx.Request], httpx.Response], token: Optional[str] = None) -> ApiClient:
    """ApiClient over an httpx.MockTransport, for transport-level failures."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ApiClient(base_url=BASE_URL, session=Session(MemoryTokenStore(token)), http=http)


class Gate:
    """Holds mocked responses until the test releases them, in any order."""

    def __init__(self):
        self.pending: list[tuple[httpx.Request, asyncio.Future]] = []
        self.arrived = asyncio.Event()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        future = asyncio.get_running_loop().create_future()
        self.pending.append((request, future))
        self.arrived.set()
        return await future

    async def wait_for(self, count: int) -> None:
        while len(self.pending) < count:
            self.arrived.clear()
            await self.arrived.wait()

    def release(self, index: int, response: httpx.Response) -> None:
        self.pending[index][1].set_result(response)
