"""Pydantic schemas for per-user Vapi settings."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserSettingsRead(BaseModel):
    id: int
    user_id: str
    vapi_private_key: Optional[str] = None
    assistant_id: Optional[str] = None
    phone_number_id: Optional[str] = None
    default_customer_number: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = _camel


class UserSettingsUpdate(BaseModel):
    """Only the fields present in the request body are written."""

    vapi_private_key: Optional[str] = Field(default=None, max_length=255)
    assistant_id: Optional[str] = Field(default=None, max_length=255)
    phone_number_id: Optional[str] = Field(default=None, max_length=255)
    default_customer_number: Optional[str] = Field(default=None, max_length=50)

    model_config = _camel
