from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from app.agent.llm_client import LLMClient
from app.core.config import ModelConfig, settings

InType = TypeVar("InType", bound=BaseModel | str)
OutType = TypeVar("OutType", bound=BaseModel)

class BaseAgent(ABC, Generic[InType, OutType]):
    """Abstract base class for agents backed by an ordered list of models."""

    def __init__(
        self,
        models: list[ModelConfig] | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.models = list(models or settings.GENERATION_MODELS)
        self.llm = LLMClient(base_url=base_url, api_key=api_key)

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        """Run the agent on the given input to produce the output artifact."""
        pass
