"""Stateful request lifecycles for presentation code.

A ``Query`` owns one piece of remote data and moves between four states:

    idle -> loading -> ready      (data stored, error cleared)
                    -> failed     (error stored, previous data kept)

``mount()`` schedules the first fetch, ``refetch()`` repeats the cycle on
demand and ``unmount()`` cancels whatever is still in flight. There is no
automatic retry. When fetches overlap, only the most recently started one may
write state; earlier ones resolve silently.

A ``Mutation`` has the same loading/error pair but only runs when called.
"""
import asyncio
import enum
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from social_sports.client import ApiClient
from social_sports.errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[[Any], None]


class QueryState(str, enum.Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    failed = "failed"
    unavailable = "unavailable"


class Resource:
    """Listener bookkeeping and task ownership shared by queries and mutations."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.loading = False
        self.error: Optional[ApiError] = None
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()
        self._unmounted = False

    @property
    def unmounted(self) -> bool:
        return self._unmounted

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(self)`` after every state change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if self._unmounted:
            return
        for listener in list(self._listeners):
            listener(self)

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def unmount(self) -> None:
        """Tear down: cancel in-flight requests and stop publishing state."""
        self._unmounted = True
        self._listeners.clear()
        for task in list(self._tasks):
            task.cancel()


class Query(Resource, Generic[T]):
    """Base class for read hooks; subclasses implement ``_fetch``."""

    description = "data"

    def __init__(self, client: ApiClient, initial: Optional[T] = None):
        super().__init__(client)
        self.data: Optional[T] = initial
        self.loading = True
        self._has_loaded = False
        self._sequence = 0

    async def _fetch(self) -> T:
        raise NotImplementedError

    def should_fetch(self) -> bool:
        return True

    @property
    def state(self) -> QueryState:
        if self.loading:
            return QueryState.loading
        if self.error is not None:
            return QueryState.failed
        if self._has_loaded:
            return QueryState.ready
        return QueryState.idle

    def mount(self) -> asyncio.Task:
        """Start the initial fetch on the running event loop."""
        return self._spawn(self.refetch())

    def _is_current(self, sequence: int) -> bool:
        return not self._unmounted and sequence == self._sequence

    async def refetch(self) -> None:
        # any newer call, fetching or not, supersedes fetches still in flight
        self._sequence += 1
        sequence = self._sequence
        if not self.should_fetch():
            self.loading = False
            self._notify()
            return

        self.loading = True
        self._notify()

        try:
            data = await self._fetch()
        except ApiError as exc:
            if not self._is_current(sequence):
                return
            logger.error("Error fetching %s: %s", self.description, exc)
            self._on_failure(exc)
        else:
            if not self._is_current(sequence):
                logger.debug("Discarding stale %s response", self.description)
                return
            self._on_success(data)
        self.loading = False
        self._notify()

    def _on_success(self, data: T) -> None:
        self.data = data
        self.error = None
        self._has_loaded = True

    def _on_failure(self, exc: ApiError) -> None:
        self.error = exc


class Mutation(Resource):
    """Base class for write hooks."""

    def _begin(self) -> None:
        self.loading = True
        self._notify()

    def _finish(self) -> None:
        self.loading = False
        self._notify()
