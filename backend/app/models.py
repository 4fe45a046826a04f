import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.agent.artifacts import IcebreakerStyle


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


# Shared config: camelCase on the wire, snake_case in Python
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Properties to receive via API on generation
class GenerateIcebreakersRequest(CamelModel):
    profile_text: str
    style: str | None = None


# Generic error body returned by every failing route
class ErrorResponse(CamelModel):
    error: str
    code: str


class HealthStatus(CamelModel):
    status: Literal["ok"] = "ok"
    timestamp: datetime = Field(default_factory=get_datetime_utc)
    api_key_configured: bool = False


class AnalyticsEvent(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=get_datetime_utc)
    event: Literal["icebreaker_generated", "generation_failed"]
    style: IcebreakerStyle | None = None
    success: bool
    profile_length: int | None = None
    generation_time: int | None = Field(default=None, description="Milliseconds")
    error_type: str | None = None


class StyleBreakdown(CamelModel):
    professional: int = 0
    casual: int = 0
    creative: int = 0


class AnalyticsStats(CamelModel):
    total_requests: int
    successful_requests: int
    failed_requests: int
    success_rate: float = Field(description="Percentage of successful requests, 0-100")
    style_breakdown: StyleBreakdown
    average_generation_time: float = Field(description="Milliseconds, successful requests only")
    recent_events: list[AnalyticsEvent]
