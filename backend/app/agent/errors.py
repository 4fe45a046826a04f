"""Closed error taxonomy for the generation pipeline.

Classification prefers structured signals from the `openai` exception types and
falls back to matching the failure message. Message matching depends on the
provider's wording and can drift between library versions.
"""
import asyncio
from enum import Enum

import openai


class ErrorClass(str, Enum):
    API_KEY_ERROR = "API_KEY_ERROR"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    RATE_LIMITED = "RATE_LIMITED"
    GENERATION_FAILED = "GENERATION_FAILED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SERVICE_ERROR = "SERVICE_ERROR"


USER_MESSAGES: dict[ErrorClass, str] = {
    ErrorClass.API_KEY_ERROR: "API configuration error - please check server settings",
    ErrorClass.QUOTA_EXCEEDED: "Service quota exceeded - please try again later",
    ErrorClass.RATE_LIMITED: "Rate limit exceeded - please try again in a moment",
    ErrorClass.GENERATION_FAILED: "Failed to generate icebreakers - please try again",
    ErrorClass.INVALID_RESPONSE: "Invalid response received - please try again",
    ErrorClass.SERVICE_ERROR: "Service temporarily unavailable - please try again",
}

# Failures for which trying another model cannot help.
NON_RETRYABLE_CLASSES = frozenset({ErrorClass.API_KEY_ERROR, ErrorClass.QUOTA_EXCEEDED})

_MESSAGE_SIGNALS: list[tuple[tuple[str, ...], ErrorClass]] = [
    (("api key", "api_key", "credentials", "unauthorized", "authentication"), ErrorClass.API_KEY_ERROR),
    (("quota",), ErrorClass.QUOTA_EXCEEDED),
    (("rate limit", "rate_limit", "too many requests"), ErrorClass.RATE_LIMITED),
    (("failed to generate",), ErrorClass.GENERATION_FAILED),
    (("invalid response",), ErrorClass.INVALID_RESPONSE),
]


class InvalidResponseError(ValueError):
    """Model reply could not be parsed or failed structural validation."""

    def __init__(self, message: str = "Invalid response structure from model"):
        super().__init__(message)


class ProfileValidationError(ValueError):
    """Submitted profile text or style broke an input rule."""

    error_class = ErrorClass.VALIDATION_ERROR


class IcebreakerGenerationError(Exception):
    """Raised by the generation pipeline once every configured model has failed."""

    def __init__(self, error_class: ErrorClass, cause: BaseException | None = None):
        super().__init__(USER_MESSAGES.get(error_class, USER_MESSAGES[ErrorClass.SERVICE_ERROR]))
        self.error_class = error_class
        self.cause = cause

    @property
    def user_message(self) -> str:
        return str(self)


def _classify_structured(error: BaseException) -> ErrorClass | None:
    if isinstance(error, IcebreakerGenerationError):
        return error.error_class
    if isinstance(error, ProfileValidationError):
        return ErrorClass.VALIDATION_ERROR
    if isinstance(error, InvalidResponseError):
        return ErrorClass.INVALID_RESPONSE
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ErrorClass.API_KEY_ERROR
    if isinstance(error, openai.RateLimitError):
        code = getattr(error, "code", None) or ""
        if "quota" in str(code).lower() or "quota" in str(error).lower():
            return ErrorClass.QUOTA_EXCEEDED
        return ErrorClass.RATE_LIMITED
    return None


def classify_error(error: BaseException) -> tuple[ErrorClass, str]:
    """Map an exception to its error class and the message safe to show a client."""
    error_class = _classify_structured(error)
    if error_class is None:
        message = str(error).lower()
        error_class = next(
            (cls for signals, cls in _MESSAGE_SIGNALS if any(s in message for s in signals)),
            ErrorClass.SERVICE_ERROR,
        )

    if error_class is ErrorClass.VALIDATION_ERROR:
        # Input-rule violations are about the caller's own data; safe to expose.
        return error_class, str(error)
    return error_class, USER_MESSAGES[error_class]


def is_timeout(error: BaseException) -> bool:
    return isinstance(error, (asyncio.TimeoutError, openai.APITimeoutError))
