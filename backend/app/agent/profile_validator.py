import re

from app.agent.artifacts import DEFAULT_STYLE, ICEBREAKER_STYLES, ProfileRequest
from app.agent.errors import ProfileValidationError
from app.core.config import settings


def _has_repeated_run(text: str, max_repeats: int) -> bool:
    return re.search(r"(.)\1{%d,}" % max_repeats, text, re.DOTALL) is not None


def _alpha_ratio(text: str) -> float:
    if not text:
        return 0.0
    return sum(1 for ch in text if ch.isalpha()) / len(text)


def validate_profile_request(profile_text: str, style: str | None = None) -> ProfileRequest:
    """Apply the static input rules in order; the first failing rule wins.

    Returns the normalized request or raises ProfileValidationError with a
    message describing the violated rule.
    """
    text = profile_text or ""

    if len(text) < settings.PROFILE_TEXT_MIN_LENGTH:
        raise ProfileValidationError(
            f"Profile text must be at least {settings.PROFILE_TEXT_MIN_LENGTH} characters"
        )
    if len(text) > settings.PROFILE_TEXT_MAX_LENGTH:
        raise ProfileValidationError(
            f"Profile text must be at most {settings.PROFILE_TEXT_MAX_LENGTH} characters"
        )
    if _has_repeated_run(text, settings.MAX_REPEATED_CHARS):
        raise ProfileValidationError("Profile text contains too many repeated characters")
    if _alpha_ratio(text) <= settings.MIN_ALPHA_RATIO:
        raise ProfileValidationError("Profile text does not look like meaningful profile content")

    normalized_style = (style or "").strip().lower() or DEFAULT_STYLE
    if normalized_style not in ICEBREAKER_STYLES:
        raise ProfileValidationError(
            f"Style must be one of: {', '.join(ICEBREAKER_STYLES)}"
        )

    return ProfileRequest(profile_text=text.strip(), style=normalized_style)
