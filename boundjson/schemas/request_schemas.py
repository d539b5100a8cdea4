from __future__ import annotations

from pydantic import BaseModel, Field


class GreetingRequest(BaseModel):
    message: str = Field(min_length=1, max_length=280)
