"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# bcrypt ignores everything past the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _clean_username(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Username must not be blank")
    return value


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Username = Annotated[str, Field(min_length=1, max_length=150), AfterValidator(_clean_username)]
Password = Annotated[str, AfterValidator(_check_password_length)]


class SignupRequest(BaseModel):
    username: Username
    password: Annotated[Password, Field(min_length=1)]


class LoginRequest(BaseModel):
    """Normalized like SignupRequest so the stored username always matches."""

    username: Username
    password: Password


class UserRead(BaseModel):
    id: str
    username: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    auth_method: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class TokenResponse(BaseModel):
    token: str
    user: UserRead


class LogoutResponse(BaseModel):
    ok: bool = True
