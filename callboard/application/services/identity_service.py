"""Identity service — provider lookup and signed OAuth state tokens."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from callboard.config import Settings
from callboard.core.exceptions import UnauthorizedException
from callboard.domain.identity import IdentityProvider
from callboard.infrastructure.google_oauth import GoogleIdentityProvider


def get_identity_provider(name: str, settings: Settings) -> Optional[IdentityProvider]:
    """Return the configured provider for ``name``, or None when it is not set up."""
    if name == "google" and settings.google_enabled:
        return GoogleIdentityProvider(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            redirect_uri=settings.GOOGLE_CALLBACK_URL,
        )
    return None


def create_oauth_state(provider: str, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.OAUTH_STATE_TTL_MINUTES)
    claims = {"provider": provider, "nonce": secrets.token_urlsafe(16), "exp": expire}
    return jwt.encode(claims, settings.SESSION_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_oauth_state(state: Optional[str], provider: str, settings: Settings) -> None:
    """Raise UnauthorizedException unless ``state`` was issued by us for ``provider`` and is fresh."""
    if not state:
        raise UnauthorizedException("Missing OAuth state")
    try:
        payload = jwt.decode(state, settings.SESSION_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise UnauthorizedException("Invalid OAuth state")
    if payload.get("provider") != provider:
        raise UnauthorizedException("Invalid OAuth state")
