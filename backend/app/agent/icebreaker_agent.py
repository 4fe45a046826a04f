import logging

from pydantic import ValidationError

from app.agent.artifacts import IcebreakerResult, ProfileRequest
from app.agent.base import BaseAgent
from app.agent.errors import (
    NON_RETRYABLE_CLASSES,
    ErrorClass,
    IcebreakerGenerationError,
    InvalidResponseError,
    classify_error,
    is_timeout,
)
from app.agent.prompts.icebreaker import build_icebreaker_prompt
from app.agent.response_validator import is_valid_icebreaker_payload
from app.core.config import ModelConfig

logger = logging.getLogger(__name__)


class IcebreakerAgent(BaseAgent[ProfileRequest, IcebreakerResult]):
    """
    Generates three two-line icebreakers for a validated profile, trying each
    configured model in order until one returns a structurally valid reply.
    """

    async def _generate_with_model(
        self, model: ModelConfig, system_prompt: str, user_prompt: str
    ) -> IcebreakerResult:
        payload = await self.llm.generate_json(model, system_prompt, user_prompt)
        if not is_valid_icebreaker_payload(payload):
            raise InvalidResponseError(f"Invalid response structure from {model.name}")
        data = {"icebreakers": payload["icebreakers"]}
        notes = payload.get("notes")
        # Missing or blank notes fall back to the model default.
        if isinstance(notes, str) and notes.strip():
            data["notes"] = notes.strip()
        try:
            return IcebreakerResult.model_validate(data)
        except ValidationError as e:
            raise InvalidResponseError(f"Invalid response structure from {model.name}: {e}") from e

    async def run(self, input_data: ProfileRequest) -> IcebreakerResult:
        """
        Runs the model fallback traversal for the request.
        Raises IcebreakerGenerationError carrying the classified last failure.
        """
        prompt = build_icebreaker_prompt(input_data.profile_text, input_data.style)

        last_error: Exception | None = None
        for attempt_idx, model in enumerate(self.models, start=1):
            try:
                logger.info(
                    "Attempting icebreaker generation with model %s (%s/%s)",
                    model.name,
                    attempt_idx,
                    len(self.models),
                )
                result = await self._generate_with_model(model, prompt.system, prompt.user)
                logger.info("Successfully generated icebreakers using model %s", model.name)
                return result
            except Exception as e:
                last_error = e
                if is_timeout(e):
                    logger.warning("Model %s timed out after %ss", model.name, model.timeout_seconds)
                else:
                    logger.warning("Model %s failed: %s", model.name, e)

                error_class, _ = classify_error(e)
                if error_class in NON_RETRYABLE_CLASSES:
                    logger.error("Stopping model fallback on %s from %s", error_class.value, model.name)
                    break

        logger.error("All models failed, last error: %s", last_error)
        if last_error is None:
            raise IcebreakerGenerationError(ErrorClass.GENERATION_FAILED)

        error_class, _ = classify_error(last_error)
        if error_class is ErrorClass.SERVICE_ERROR:
            error_class = ErrorClass.GENERATION_FAILED
        raise IcebreakerGenerationError(error_class, cause=last_error) from last_error
