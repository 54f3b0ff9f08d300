"""Transport layer: the single generic request executor for the REST backend.

Responsibilities:
- URL building from the configured base (``.../api``) plus an endpoint path
- Bearer auth from the injected ``Session``; missing token fails before any I/O
- 401 invalidates the session
- 403/404 under ``/whatsapp`` soft-fails to an empty value
- other non-2xx become ``ApiError`` carrying the backend's ``message``
- 204 resolves to ``{}``
"""
import logging
from typing import Any, Optional, Sequence, Union

import httpx

from social_sports.config import Settings, normalize_base_url, settings as default_settings
from social_sports.errors import (
    ApiError,
    AuthenticationRequiredError,
    NetworkError,
    message_from_payload,
)
from social_sports.schemas.base import CamelModel
from social_sports.session import Session

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE")
WHATSAPP_PREFIX = "/whatsapp"
SOFT_FAIL_STATUSES = (403, 404)

# Empty values returned when the WhatsApp service is absent or not configured.
WHATSAPP_SOFT_FAIL_RESPONSES: dict[str, dict[str, Any]] = {
    "/whatsapp/qrcode": {"qrCodeUrl": ""},
}

Body = Union[CamelModel, dict[str, Any], None]


def _serialize(data: Body) -> Optional[dict[str, Any]]:
    if data is None:
        return None
    if isinstance(data, CamelModel):
        return data.to_payload()
    return data


def _soft_fail_value(endpoint: str) -> dict[str, Any]:
    path = endpoint.split("?", 1)[0]
    return dict(WHATSAPP_SOFT_FAIL_RESPONSES.get(path, {}))


class ApiClient:
    """Async client for the Social Sports REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Session] = None,
        http: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = normalize_base_url(base_url or default_settings.API_BASE_URL)
        self.session = session if session is not None else Session()
        self._owns_http = http is None
        if http is None:
            http = httpx.AsyncClient(timeout=timeout if timeout is not None else default_settings.REQUEST_TIMEOUT)
        self._http = http

    @classmethod
    def from_settings(cls, config: Settings, session: Optional[Session] = None) -> "ApiClient":
        return cls(base_url=config.API_BASE_URL, session=session, timeout=config.REQUEST_TIMEOUT)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def _headers(self, requires_auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if requires_auth:
            token = self.session.token
            if not token:
                raise AuthenticationRequiredError()
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        data: Body = None,
        requires_auth: bool = True,
    ) -> Any:
        """Issue one request and return the parsed JSON body.

        Raises:
            AuthenticationRequiredError: no token when auth is required, or 401.
            NetworkError: the host could not be reached, or the body is not JSON.
            ApiError: any other non-2xx response.
        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        headers = self._headers(requires_auth)
        url = self.url_for(endpoint)

        try:
            response = await self._http.request(method, url, headers=headers, json=_serialize(data))
        except httpx.TransportError as exc:
            logger.error("API request failed: %s %s (%s)", method, endpoint, exc)
            raise NetworkError(f"Network error: unable to reach {url}") from exc

        return self._handle_response(method, endpoint, response)

    def _handle_response(self, method: str, endpoint: str, response: httpx.Response) -> Any:
        status_code = response.status_code

        if not response.is_success:
            if status_code == 401:
                self.session.invalidate()
                logger.error("API request failed: %s %s returned 401", method, endpoint)
                raise AuthenticationRequiredError(status_code=401)

            if status_code in SOFT_FAIL_STATUSES and WHATSAPP_PREFIX in endpoint:
                logger.warning(
                    "WhatsApp endpoint %s returned %d - service unavailable or not configured",
                    endpoint, status_code,
                )
                return _soft_fail_value(endpoint)

            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = message_from_payload(payload, status_code)
            logger.error("API request failed: %s %s returned %d: %s", method, endpoint, status_code, message)
            raise ApiError(message, status_code=status_code, payload=payload)

        if status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as exc:
            logger.error("API request failed: %s %s returned a non-JSON body", method, endpoint)
            raise NetworkError(
                f"Unexpected response format from {endpoint}", status_code=status_code
            ) from exc

    async def request_first(
        self,
        endpoints: Sequence[str],
        method: str = "GET",
        data: Body = None,
        requires_auth: bool = True,
    ) -> Any:
        """Try ``endpoints`` in order; the first success wins.

        A missing or rejected token stops the walk immediately. When every
        candidate fails, the last error is raised.
        """
        if not endpoints:
            raise ValueError("At least one endpoint is required")

        last_error: Optional[ApiError] = None
        for index, endpoint in enumerate(endpoints):
            if index:
                logger.info("Previous endpoint failed, trying fallback: %s", endpoint)
            try:
                return await self.request(endpoint, method, data, requires_auth)
            except AuthenticationRequiredError:
                raise
            except ApiError as exc:
                last_error = exc
        assert last_error is not None
        raise last_error

    async def probe(self, endpoint: str) -> bool:
        """HEAD ``endpoint``; True when the backend answers 2xx/3xx."""
        headers: dict[str, str] = {}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = await self._http.head(self.url_for(endpoint), headers=headers)
        except httpx.TransportError as exc:
            logger.warning("Probe of %s failed: %s", endpoint, exc)
            return False
        if response.status_code >= 400:
            logger.warning("Probe of %s returned %d", endpoint, response.status_code)
            return False
        return True
