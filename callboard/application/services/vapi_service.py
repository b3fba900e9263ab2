"""Vapi service — builds per-user clients and shapes provider results."""

from typing import Any, Iterable, List, Optional

from fastapi import status
from sqlalchemy.orm import Session

from callboard.application.services.settings_service import get_user_settings
from callboard.config import get_settings
from callboard.core.exceptions import AppError
from callboard.domain.models.user_settings import UserSettings
from callboard.infrastructure.vapi_api import VapiAPIError, VapiClient

# Provider messages that are the caller's problem rather than ours
OUTBOUND_NOT_ENABLED = "Can't Dial Outbound Yet"
INVALID_E164 = "valid phone number in the E.164 format"


def resolve_private_key(user_settings: Optional[UserSettings]) -> str:
    """Per-user key, then the process-wide default, else empty."""
    if user_settings is not None and user_settings.vapi_private_key:
        return user_settings.vapi_private_key
    return get_settings().VAPI_PRIVATE_KEY


def client_for_user(db: Session, user_id: str) -> VapiClient:
    user_settings = get_user_settings(db, user_id)
    return VapiClient(
        private_key=resolve_private_key(user_settings),
        assistant_id=user_settings.assistant_id if user_settings else None,
        phone_number_id=user_settings.phone_number_id if user_settings else None,
    )


def translate_create_call_error(error: VapiAPIError) -> AppError:
    """Turn the provider's known create-call rejections into 400s the dashboard can show."""
    if OUTBOUND_NOT_ENABLED in error.body:
        return AppError(
            "Outbound calling not enabled",
            status.HTTP_400_BAD_REQUEST,
            {
                "hint": "Your VAPI account needs outbound calling enabled. "
                "Contact VAPI support to enable this feature.",
                "provider": error.details,
            },
        )
    if INVALID_E164 in error.body:
        return AppError(
            "Invalid phone number format",
            status.HTTP_400_BAD_REQUEST,
            {
                "hint": "Please enter a valid phone number with country code (e.g., +15551234567)",
                "provider": error.details,
            },
        )
    return error


def _text(value: Any) -> str:
    return str(value).lower() if value is not None else ""


def _searchable_fields(call: dict) -> Iterable[str]:
    customer = call.get("customer") or {}
    assistant = call.get("assistant") or {}
    yield _text(call.get("id"))
    yield _text(customer.get("number"))
    yield _text(customer.get("name"))
    yield _text(assistant.get("name"))


def search_calls(calls: Iterable[Any], query: Optional[str]) -> List[Any]:
    """Case-insensitive substring match on id, customer number/name and assistant name."""
    calls = list(calls or [])
    needle = (query or "").strip().lower()
    if not needle:
        return calls
    return [
        call
        for call in calls
        if isinstance(call, dict) and any(needle in field for field in _searchable_fields(call))
    ]
