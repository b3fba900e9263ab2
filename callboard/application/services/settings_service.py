"""Settings service — per-user Vapi credentials with create-or-merge updates."""

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from callboard.domain.models.user_settings import UserSettings
from callboard.domain.schemas.settings import UserSettingsUpdate

logger = structlog.get_logger(__name__)


def get_user_settings(db: Session, user_id: str) -> Optional[UserSettings]:
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


def upsert_user_settings(db: Session, user_id: str, update: UserSettingsUpdate) -> UserSettings:
    """Create the settings row on first save, otherwise merge the provided fields.

    Fields absent from ``update`` keep their stored value; ``updated_at`` is always stamped.
    The unique ``user_id`` index decides concurrent first saves: the loser merges into
    the winner's row.
    """
    settings = get_user_settings(db, user_id)
    if settings is None:
        settings = UserSettings(user_id=user_id)
        db.add(settings)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            logger.info("Settings row created concurrently, merging", user_id=user_id)
            settings = get_user_settings(db, user_id)

    changed = update.model_dump(exclude_unset=True)
    for field, value in changed.items():
        setattr(settings, field, value)
    settings.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(settings)
    logger.info("User settings saved", user_id=user_id, fields=sorted(changed))
    return settings
