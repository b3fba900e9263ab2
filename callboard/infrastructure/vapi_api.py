"""Vapi HTTP client.

A thin async wrapper over https://api.vapi.ai. One client is built per
request from the caller's settings. Failures are reported immediately:
there are no retries, backoff or circuit breaking.
"""

import re
from typing import Any, Optional

import httpx
import structlog

from callboard.config import get_settings
from callboard.core.exceptions import (
    ProviderNotConfiguredError,
    UpstreamError,
    ValidationException,
)

logger = structlog.get_logger(__name__)

NON_DIGITS = re.compile(r"\D")


class VapiAPIError(UpstreamError):
    """Vapi answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str):
        self.provider_status = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"VAPI API error: {status_code} {reason} - {body}",
            details={"status": status_code, "statusText": reason, "body": body},
        )


def format_to_e164(phone_number: str) -> str:
    """Best-effort E.164 normalization, biased towards US numbers.

    Not a validator: anything shorter than 10 digits still gets a +1 prefix.
    """
    digits = NON_DIGITS.sub("", phone_number)

    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) > 10:
        return f"+{digits}"
    return f"+1{digits}"


class VapiClient:
    """Client for the Vapi REST API, scoped to one private key."""

    def __init__(
        self,
        private_key: Optional[str],
        assistant_id: Optional[str] = None,
        phone_number_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.private_key = private_key or ""
        self.assistant_id = assistant_id
        self.phone_number_id = phone_number_id
        self.base_url = (base_url or settings.VAPI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.VAPI_TIMEOUT_SECONDS

    def _require_key(self) -> None:
        if not self.private_key:
            raise ProviderNotConfiguredError()

    async def _request(self, method: str, endpoint: str, json: Any = None) -> Any:
        self._require_key()

        headers = {
            "Authorization": f"Bearer {self.private_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
                response = await client.request(method, endpoint, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("VAPI connection error", method=method, endpoint=endpoint, error=str(e))
            raise UpstreamError(f"VAPI connection error: {e}", details={"endpoint": endpoint})

        if response.is_error:
            logger.warning(
                "VAPI API error",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise VapiAPIError(response.status_code, response.reason_phrase, response.text)

        if not response.content:
            return None
        return response.json()

    async def list_calls(self) -> Any:
        return await self._request("GET", "/call")

    async def get_call(self, call_id: str) -> Any:
        return await self._request("GET", f"/call/{call_id}")

    async def create_call(self, phone_number: str, assistant_id: Optional[str] = None) -> Any:
        """Place an outbound call to ``phone_number`` using the configured phone number."""
        customer_number = format_to_e164(phone_number)
        payload = {
            "phoneNumberId": self.phone_number_id,
            "assistantId": assistant_id or self.assistant_id,
            "customer": {"number": customer_number},
        }
        logger.info("Creating VAPI call", customer_number=customer_number)
        return await self._request("POST", "/call", json=payload)

    async def delete_call(self, call_id: str) -> Any:
        return await self._request("DELETE", f"/call/{call_id}")

    async def get_assistant(self, assistant_id: Optional[str] = None) -> Any:
        self._require_key()
        assistant_id = assistant_id or self.assistant_id
        if not assistant_id:
            raise ValidationException("Assistant ID is required", details={"field": "assistantId"})
        return await self._request("GET", f"/assistant/{assistant_id}")

    async def update_assistant(self, assistant_id: str, updates: dict) -> Any:
        return await self._request("PATCH", f"/assistant/{assistant_id}", json=updates)

    async def get_phone_number(self, phone_number_id: Optional[str] = None) -> Any:
        self._require_key()
        phone_number_id = phone_number_id or self.phone_number_id
        if not phone_number_id:
            raise ValidationException("Phone number ID is required", details={"field": "phoneNumberId"})
        return await self._request("GET", f"/phone-number/{phone_number_id}")
