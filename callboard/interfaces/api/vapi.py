"""Vapi proxy routes — the signed-in user's calls, assistant and phone number at Vapi."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from callboard.application.services.vapi_service import (
    client_for_user,
    search_calls,
    translate_create_call_error,
)
from callboard.domain.schemas.vapi import CreateCallRequest
from callboard.infrastructure.database import get_db
from callboard.infrastructure.vapi_api import VapiAPIError, VapiClient
from callboard.interfaces.api.deps import get_current_user_id

router = APIRouter(prefix="/api/vapi", tags=["Vapi"])


def get_vapi_client(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> VapiClient:
    return client_for_user(db, user_id)


@router.get("/calls")
async def list_vapi_calls(client: VapiClient = Depends(get_vapi_client)):
    return await client.list_calls()


@router.get("/calls/{call_id}")
async def get_vapi_call(call_id: str, client: VapiClient = Depends(get_vapi_client)):
    return await client.get_call(call_id)


@router.post("/calls")
async def create_vapi_call(body: CreateCallRequest, client: VapiClient = Depends(get_vapi_client)):
    try:
        return await client.create_call(body.phone_number, body.assistant_id)
    except VapiAPIError as e:
        raise translate_create_call_error(e)


@router.delete("/calls/{call_id}")
async def delete_vapi_call(call_id: str, client: VapiClient = Depends(get_vapi_client)):
    return await client.delete_call(call_id)


@router.get("/search")
async def search_vapi_calls(
    q: Optional[str] = Query(default=None),
    client: VapiClient = Depends(get_vapi_client),
):
    calls = await client.list_calls()
    return search_calls(calls, q)


@router.get("/assistant")
@router.get("/assistant/{assistant_id}")
async def get_vapi_assistant(
    assistant_id: Optional[str] = None,
    client: VapiClient = Depends(get_vapi_client),
):
    return await client.get_assistant(assistant_id)


@router.patch("/assistant/{assistant_id}")
async def update_vapi_assistant(
    assistant_id: str,
    updates: Dict[str, Any] = Body(...),
    client: VapiClient = Depends(get_vapi_client),
):
    return await client.update_assistant(assistant_id, updates)


@router.get("/phone")
@router.get("/phone/{phone_number_id}")
async def get_vapi_phone_number(
    phone_number_id: Optional[str] = None,
    client: VapiClient = Depends(get_vapi_client),
):
    return await client.get_phone_number(phone_number_id)
