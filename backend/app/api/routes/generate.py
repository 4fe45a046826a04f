import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.agent.artifacts import IcebreakerResult
from app.agent.errors import IcebreakerGenerationError, ProfileValidationError, classify_error
from app.agent.profile_validator import validate_profile_request
from app.api.deps import AnalyticsDep, IcebreakerAgentDep, block_bots, enforce_payload_limit
from app.core.exceptions import APIError
from app.models import ErrorResponse, GenerateIcebreakersRequest

router = APIRouter()
logger = logging.getLogger(__name__)


async def _parse_generate_request(request: Request) -> GenerateIcebreakersRequest:
    # Parsed here rather than as a body parameter so the guards run first.
    body = await request.body()
    try:
        return GenerateIcebreakersRequest.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=body) from e


@router.post(
    "/generate-icebreakers",
    response_model=IcebreakerResult,
    dependencies=[Depends(enforce_payload_limit), Depends(block_bots)],
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": GenerateIcebreakersRequest.model_json_schema(by_alias=True),
                },
            },
        },
    },
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_icebreakers(
    request: Request,
    agent: IcebreakerAgentDep,
    analytics: AnalyticsDep,
) -> Any:
    """
    Validate the pasted profile, run the model fallback pipeline and return
    three icebreakers. Every outcome past body parsing is recorded in analytics.
    """
    request_in = await _parse_generate_request(request)
    started = time.perf_counter()
    profile_length = len(request_in.profile_text)

    try:
        profile = validate_profile_request(request_in.profile_text, request_in.style)
    except ProfileValidationError as e:
        analytics.record(
            event="generation_failed",
            success=False,
            profile_length=profile_length,
            error_type=e.error_class.value,
        )
        raise APIError(status_code=400, code=e.error_class.value, message=str(e))

    profile_length = len(profile.profile_text)
    try:
        result = await agent.run(profile)
    except Exception as e:
        if isinstance(e, IcebreakerGenerationError):
            error_class, message = e.error_class, e.user_message
        else:
            error_class, message = classify_error(e)
        logger.error("Generate icebreakers error (%s): %s", error_class.value, e, exc_info=e)
        analytics.record(
            event="generation_failed",
            style=profile.style,
            success=False,
            profile_length=profile_length,
            generation_time=int((time.perf_counter() - started) * 1000),
            error_type=error_class.value,
        )
        raise APIError(status_code=500, code=error_class.value, message=message)

    analytics.record(
        event="icebreaker_generated",
        style=profile.style,
        success=True,
        profile_length=profile_length,
        generation_time=int((time.perf_counter() - started) * 1000),
    )
    return result
