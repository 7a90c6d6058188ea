from typing import Optional
from pydantic import BaseModel, Field


class SleepRequest(BaseModel):
    hours: float = Field(description="Hours slept. Must be positive.", examples=[7.5])


class SleepResponse(BaseModel):
    hours: Optional[float] = None


class MeditationRequest(BaseModel):
    minutes: float = Field(description="Minutes meditated. Must be positive.", examples=[10])


class MeditationResponse(BaseModel):
    minutes: Optional[float] = None


class UserNameRequest(BaseModel):
    name: str = Field(max_length=100, examples=["Sam"])


class UserNameResponse(BaseModel):
    name: str
