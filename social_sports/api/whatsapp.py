"""WhatsApp integration endpoints.

The WhatsApp service is optional and frequently absent, so the QR code fetch
never raises for a missing or forbidden endpoint: it returns an empty code.
"""
import logging

from social_sports.api.base import parse
from social_sports.client import SOFT_FAIL_STATUSES, ApiClient
from social_sports.config import settings
from social_sports.errors import ApiError
from social_sports.schemas.whatsapp import QrCode, WhatsAppLinkRequest, WhatsAppLinkResult, WhatsAppStatus

logger = logging.getLogger(__name__)


async def get_qr_code(client: ApiClient) -> QrCode:
    try:
        data = await client.request("/whatsapp/qrcode")
    except ApiError as exc:
        if exc.status_code in SOFT_FAIL_STATUSES:
            logger.warning("WhatsApp QR code endpoint returned %s, using empty response", exc.status_code)
            return QrCode()
        raise
    return parse(QrCode, data)


async def get_status(client: ApiClient) -> WhatsAppStatus:
    return parse(WhatsAppStatus, await client.request("/whatsapp/status"))


async def link_account(client: ApiClient, user_id: str, phone_number: str) -> WhatsAppLinkResult:
    payload = WhatsAppLinkRequest(user_id=user_id, phone_number=phone_number)
    return parse(WhatsAppLinkResult, await client.request("/whatsapp/link", "POST", payload))


async def probe_backend(client: ApiClient) -> bool:
    """Cheap HEAD check that the WhatsApp service is deployed at all."""
    return await client.probe(settings.WHATSAPP_PROBE_PATH)
