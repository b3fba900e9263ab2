"""Auth API routes — signup, login, logout, me, Google sign-in."""

from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from callboard.application.services import auth_service
from callboard.application.services.identity_service import (
    create_oauth_state,
    get_identity_provider,
    verify_oauth_state,
)
from callboard.config import get_settings
from callboard.core.exceptions import AppError, EntityNotFoundException
from callboard.domain.models.user import User
from callboard.domain.schemas.auth import (
    LoginRequest,
    LogoutResponse,
    SignupRequest,
    TokenResponse,
    UserRead,
)
from callboard.infrastructure.database import get_db
from callboard.interfaces.api.deps import get_bearer_token, get_current_user, get_current_user_id

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    user, token = auth_service.signup(db, body.username, body.password)
    return TokenResponse(token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user, token = auth_service.login(db, body.username, body.password)
    return TokenResponse(token=token, user=UserRead.model_validate(user))


@router.post("/logout", response_model=LogoutResponse)
def logout(
    _user_id: str = Depends(get_current_user_id),
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
):
    auth_service.delete_session(db, token)
    return LogoutResponse(ok=True)


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)


@router.get("/{provider}")
def start_federated_login(provider: str):
    settings = get_settings()
    identity_provider = get_identity_provider(provider, settings)
    if identity_provider is None:
        raise EntityNotFoundException(f"Sign-in with '{provider}' is not configured")

    state = create_oauth_state(provider, settings)
    return RedirectResponse(identity_provider.authorization_url(state))


@router.get("/{provider}/callback")
async def federated_callback(
    provider: str,
    code: str = "",
    state: str = "",
    error: str = "",
    db: Session = Depends(get_db),
):
    """Finish external sign-in and hand the session token to the dashboard."""
    settings = get_settings()
    identity_provider = get_identity_provider(provider, settings)
    if identity_provider is None:
        raise EntityNotFoundException(f"Sign-in with '{provider}' is not configured")

    success_url = f"{settings.FRONTEND_URL.rstrip('/')}/auth-success"

    if error or not code:
        logger.info("Federated sign-in aborted", provider=provider, error=error or "missing_code")
        return RedirectResponse(f"{success_url}?{urlencode({'error': error or 'missing_code'})}")

    try:
        verify_oauth_state(state, provider, settings)
        profile = await identity_provider.fetch_profile(code)
    except AppError as e:
        logger.warning("Federated sign-in failed", provider=provider, error=e.message)
        return RedirectResponse(f"{success_url}?{urlencode({'error': 'authentication_failed'})}")

    user = auth_service.link_federated_user(db, profile)
    token = auth_service.create_session(db, user.id)
    logger.info("Federated sign-in succeeded", provider=provider, user_id=user.id)
    return RedirectResponse(f"{success_url}?{urlencode({'token': token, 'username': user.username})}")
