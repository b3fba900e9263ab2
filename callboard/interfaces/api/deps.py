"""FastAPI dependencies — bearer session auth and webhook key check."""

import secrets
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from callboard.application.services.auth_service import get_user_by_id, get_user_id_by_token
from callboard.config import get_settings
from callboard.core.exceptions import ServerConfigurationError, UnauthorizedException
from callboard.domain.models.user import User
from callboard.infrastructure.database import get_db


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    return authorization or ""


def get_current_user_id(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> str:
    """Resolve the Authorization header to a user id or fail with 401."""
    return get_user_id_by_token(db, token)


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedException()
    return user


def require_webhook_key(x_api_key: Optional[str] = Header(default=None)) -> None:
    """Check the X-API-KEY header against the server's webhook secret."""
    expected = get_settings().WEBHOOK_API_KEY
    if not expected:
        raise ServerConfigurationError("Server configuration error: API key not configured")
    if not x_api_key or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise UnauthorizedException("Unauthorized: Invalid or missing API key")
