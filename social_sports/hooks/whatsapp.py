"""WhatsApp QR code query with manual-only recovery.

On top of the usual query states this one can be *backend unavailable*,
entered when the upfront HEAD probe fails, when a fetch fails, or when the
service hands back an empty code. While unavailable, ``refetch()`` does
nothing; only ``retry()`` clears the flag and fetches again.
"""
import asyncio
import logging
from typing import Optional

from social_sports.api import whatsapp as whatsapp_api
from social_sports.client import ApiClient
from social_sports.errors import ApiError
from social_sports.hooks.base import Query, QueryState
from social_sports.schemas.whatsapp import QrCode

logger = logging.getLogger(__name__)


class WhatsAppQrCodeQuery(Query[QrCode]):
    description = "WhatsApp QR code"

    def __init__(self, client: ApiClient, probe: bool = True):
        super().__init__(client)
        self.probe = probe
        self.backend_unavailable = False

    @property
    def qr_code(self) -> Optional[str]:
        if self.data is None or self.data.is_empty:
            return None
        return self.data.qr_code_url

    @property
    def state(self) -> QueryState:
        if self.backend_unavailable and not self.loading:
            return QueryState.unavailable
        return super().state

    def mount(self) -> asyncio.Task:
        return self._spawn(self._start())

    async def _start(self) -> None:
        if self.probe and not await whatsapp_api.probe_backend(self.client):
            logger.warning("WhatsApp backend unavailable, not fetching QR code")
            self._mark_unavailable()
            return
        await self.refetch()

    def _mark_unavailable(self) -> None:
        self.backend_unavailable = True
        self.loading = False
        self._notify()

    def should_fetch(self) -> bool:
        return not self.backend_unavailable

    async def _fetch(self) -> QrCode:
        return await whatsapp_api.get_qr_code(self.client)

    def _on_success(self, data: QrCode) -> None:
        super()._on_success(data)
        if data.is_empty:
            logger.warning("WhatsApp service returned no QR code")
            self.backend_unavailable = True

    def _on_failure(self, exc: ApiError) -> None:
        super()._on_failure(exc)
        self.backend_unavailable = True

    async def retry(self) -> None:
        """User-triggered recovery from the unavailable state."""
        self.backend_unavailable = False
        self.error = None
        await self.refetch()
