"""Settings API routes — per-user Vapi configuration."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from callboard.application.services.settings_service import get_user_settings, upsert_user_settings
from callboard.domain.schemas.settings import UserSettingsRead, UserSettingsUpdate
from callboard.infrastructure.database import get_db
from callboard.interfaces.api.deps import get_current_user_id

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("")
def read_settings(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Stored settings, or {} when the user has never saved any."""
    settings = get_user_settings(db, user_id)
    if settings is None:
        return {}
    return UserSettingsRead.model_validate(settings).model_dump(mode="json", by_alias=True)


@router.put("", response_model=UserSettingsRead)
def update_settings(
    body: UserSettingsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    settings = upsert_user_settings(db, user_id, body)
    return UserSettingsRead.model_validate(settings)
