import asyncio
import json
import logging
import re
from typing import Any

from openai import AsyncOpenAI

from app.agent.errors import InvalidResponseError
from app.core.config import ModelConfig, settings

logger = logging.getLogger(__name__)


def _strip_code_fences(text: str) -> str:
    if not text:
        return ""
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def _extract_json_object_span(text: str) -> str | None:
    """Best-effort extraction of the first balanced top-level JSON object."""
    start_idx = text.find("{")
    if start_idx == -1:
        return None

    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]
    return None


def parse_json_object(raw_text: str) -> dict[str, Any]:
    """Parse a model reply into a JSON object, tolerating fences or stray prose."""
    text = _strip_code_fences(raw_text or "")
    if not text:
        raise InvalidResponseError("Model returned empty content")

    candidates = [text]
    balanced = _extract_json_object_span(text)
    if balanced and balanced != text:
        candidates.append(balanced)

    parse_errors: list[str] = []
    for candidate in candidates:
        try:
            parsed = json.loads(candidate, strict=False)
        except json.JSONDecodeError as e:
            parse_errors.append(str(e))
            continue
        if isinstance(parsed, dict):
            return parsed
        parse_errors.append(f"expected a JSON object, got {type(parsed).__name__}")

    raise InvalidResponseError(
        "Invalid response structure: unable to parse JSON object ("
        + " | ".join(parse_errors[:2])
        + ")"
    )


class LLMClient:
    """Provider-agnostic client for JSON-mode chat completions using the OpenAI API spec."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.base_url = base_url or settings.LLM_BASE_URL
        self.api_key = api_key or settings.resolved_api_key or None
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        # Built on first use so a missing key surfaces as a per-attempt failure.
        if self._client is None:
            self._client = AsyncOpenAI(
                base_url=self.base_url,
                api_key=self.api_key,
                # Model fallback is the only retry mechanism.
                max_retries=0,
            )
        return self._client

    @staticmethod
    def _chat_completion_kwargs(model: ModelConfig) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        model_name = model.name.lower()
        # GPT-5 family rejects non-default temperature and the legacy max_tokens parameter.
        if model_name.startswith("gpt-5"):
            return {"max_completion_tokens": model.max_tokens}
        return {"temperature": model.temperature, "max_tokens": model.max_tokens}

    async def generate_json(
        self, model: ModelConfig, system_prompt: str, user_prompt: str
    ) -> dict[str, Any]:
        """
        Issue one JSON-mode completion against `model` and return the parsed object.
        The whole call is bounded by the model's wall-clock timeout.
        """
        logger.info("Issuing JSON request to model %s...", model.name)
        response = await asyncio.wait_for(
            self.client.chat.completions.create(
                model=model.name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                timeout=model.timeout_seconds,
                **self._chat_completion_kwargs(model),
            ),
            timeout=model.timeout_seconds,
        )

        if not getattr(response, "choices", None):
            logger.error("Received no choices from %s: %s", model.name, response)
            raise InvalidResponseError(f"Invalid response structure: provider {model.name} returned no output")

        text_response = response.choices[0].message.content or ""
        return parse_json_object(text_response)
