"""Calls API routes — locally logged calls and dashboard statistics."""

from typing import List

from fastapi import APIRouter, Depends

from callboard.application.services.call_service import get_call_stats, list_calls
from callboard.domain.repositories.call_repository import CallRepository
from callboard.domain.schemas.call import CallRead, CallStats
from callboard.interfaces.api.deps import get_current_user_id
from callboard.interfaces.deps import get_call_repository

router = APIRouter(prefix="/api", tags=["Calls"])


@router.get("/calls", response_model=List[CallRead])
def get_calls(
    repo: CallRepository = Depends(get_call_repository),
    _user_id: str = Depends(get_current_user_id),
):
    return [CallRead.model_validate(c) for c in list_calls(repo)]


@router.get("/stats", response_model=CallStats)
def get_stats(
    repo: CallRepository = Depends(get_call_repository),
    _user_id: str = Depends(get_current_user_id),
):
    return get_call_stats(repo)
