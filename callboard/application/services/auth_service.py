"""Auth service — password hashing, users and DB-backed session tokens."""

import re
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from callboard.config import get_settings
from callboard.core.exceptions import ConflictException, UnauthorizedException
from callboard.domain.identity import ExternalProfile
from callboard.domain.models.auth_session import AuthSession
from callboard.domain.models.user import AUTH_METHOD_GOOGLE, AUTH_METHOD_LOCAL, User

logger = structlog.get_logger(__name__)

TOKEN_BYTES = 48
BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


@lru_cache
def get_pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return get_pwd_context().verify(plain_password, hashed_password)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def strip_bearer(token: Optional[str]) -> str:
    return BEARER_PREFIX.sub("", (token or "").strip())


# --- Users -----------------------------------------------------------------

def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_google_id(db: Session, google_id: str) -> Optional[User]:
    return db.query(User).filter(User.google_id == google_id).first()


def create_user(db: Session, username: str, password: str) -> User:
    """Create a local account. Raises ConflictException if the username is taken."""
    if get_user_by_username(db, username):
        raise ConflictException("Username already exists")

    user = User(
        username=username,
        password_hash=hash_password(password),
        auth_method=AUTH_METHOD_LOCAL,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same username
        db.rollback()
        raise ConflictException("Username already exists")
    db.refresh(user)
    logger.info("User created", user_id=user.id, username=user.username)
    return user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if not user or not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def link_federated_user(db: Session, profile: ExternalProfile) -> User:
    """Return the local user for an external identity, creating it on first sign-in."""
    user = get_user_by_google_id(db, profile.subject)
    if user:
        return user

    user = User(
        username=_available_username(db, _base_username(profile)),
        google_id=profile.subject,
        email=profile.email,
        display_name=profile.display_name,
        avatar=profile.avatar,
        auth_method=AUTH_METHOD_GOOGLE,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent callback for the same account won the insert
        db.rollback()
        existing = get_user_by_google_id(db, profile.subject)
        if existing is None:
            raise ConflictException("Username already exists")
        return existing
    db.refresh(user)
    logger.info("Federated user created", user_id=user.id, provider=profile.provider)
    return user


def _base_username(profile: ExternalProfile) -> str:
    if profile.display_name:
        return profile.display_name.strip()
    if profile.email:
        return profile.email.split("@")[0]
    return f"user_{int(utcnow().timestamp() * 1000)}"


def _available_username(db: Session, base: str) -> str:
    candidate = base
    suffix = 1
    while get_user_by_username(db, candidate):
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


# --- Sessions --------------------------------------------------------------

def create_session(db: Session, user_id: str) -> str:
    """Mint a new session token. Existing sessions of the user stay valid."""
    now = utcnow()
    token = generate_token()
    db.add(
        AuthSession(
            token=token,
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(days=get_settings().SESSION_TTL_DAYS),
        )
    )
    db.commit()
    return token


def get_user_id_by_token(db: Session, token: Optional[str]) -> str:
    """Resolve a bearer token to a user id.

    Missing, unknown and expired tokens all raise the same UnauthorizedException.
    """
    token = strip_bearer(token)
    if not token:
        raise UnauthorizedException()

    session = (
        db.query(AuthSession)
        .filter(AuthSession.token == token, AuthSession.expires_at > utcnow())
        .first()
    )
    if session is None:
        raise UnauthorizedException()
    return session.user_id


def delete_session(db: Session, token: Optional[str]) -> None:
    """Delete the session for this token. Unknown tokens are ignored."""
    token = strip_bearer(token)
    if not token:
        return
    db.query(AuthSession).filter(AuthSession.token == token).delete(synchronize_session=False)
    db.commit()


# --- Flows -----------------------------------------------------------------

def signup(db: Session, username: str, password: str) -> tuple[User, str]:
    user = create_user(db, username=username, password=password)
    return user, create_session(db, user.id)


def login(db: Session, username: str, password: str) -> tuple[User, str]:
    user = authenticate_user(db, username, password)
    if not user:
        logger.info("Login rejected", username=username)
        raise UnauthorizedException("Invalid credentials")
    return user, create_session(db, user.id)
