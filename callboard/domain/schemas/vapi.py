"""Pydantic schemas for the Vapi proxy endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CreateCallRequest(BaseModel):
    phone_number: str = Field(min_length=1, max_length=50)
    assistant_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
