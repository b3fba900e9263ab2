"""Pydantic schemas for locally logged calls and their statistics."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CallCreate(BaseModel):
    name: str = Field(max_length=200)
    status: str = Field(max_length=50)
    company: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None
    recording_url: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name", "status")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CallRead(BaseModel):
    id: str
    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str
    notes: Optional[str] = None
    recording_url: Optional[str] = None
    timestamp: datetime

    model_config = {"from_attributes": True}


class CallLogged(BaseModel):
    message: str = "Call logged successfully"
    call_id: str = Field(serialization_alias="callId")


class CallStats(BaseModel):
    total_calls: int
    completed_calls: int
    pending_calls: int
    failed_calls: int
    success_rate: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
