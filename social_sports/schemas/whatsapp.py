"""Pydantic schemas for the optional WhatsApp integration."""
from typing import Optional

from social_sports.schemas.base import CamelModel


class QrCode(CamelModel):
    qr_code_url: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.qr_code_url


class WhatsAppStatus(CamelModel):
    connected: bool = False
    phone_number: Optional[str] = None


class WhatsAppLinkRequest(CamelModel):
    user_id: str
    phone_number: str


class WhatsAppLinkResult(CamelModel):
    success: bool = False
