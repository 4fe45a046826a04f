from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

IcebreakerStyle = Literal["professional", "casual", "creative"]

ICEBREAKER_STYLES: tuple[IcebreakerStyle, ...] = ("professional", "casual", "creative")
DEFAULT_STYLE: IcebreakerStyle = "professional"

DEFAULT_NOTES = "Generated personalized icebreakers based on profile analysis"


class ProfileRequest(BaseModel):
    """Validated input for a single generation request."""
    model_config = ConfigDict(frozen=True)

    profile_text: str = Field(description="Pasted profile text, already validated")
    style: IcebreakerStyle = DEFAULT_STYLE


class Icebreaker(BaseModel):
    line1: str = Field(description="Personalised hook: a specific detail noticed in the profile")
    line2: str = Field(description="Value bridge: why the sender is reaching out and the payoff")


class IcebreakerResult(BaseModel):
    """Artifact produced by the Icebreaker Agent."""
    icebreakers: list[Icebreaker] = Field(description="Exactly three alternative icebreakers")
    notes: str = Field(default=DEFAULT_NOTES, description="One sentence on the angle chosen")


class IcebreakerPrompt(NamedTuple):
    system: str
    user: str
