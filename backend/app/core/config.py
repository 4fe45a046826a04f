from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BaseModel, BeforeValidator, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SENDER_CONTEXT = (
    "I'm a brand, web & product designer who also sets up AI automations (Zapier/n8n) "
    "to save teams time and money. I help founders, marketers and SMEs turn manual processes "
    "into simple tools (reporting, onboarding, lead follow-ups, content ops)."
)

DEFAULT_BLOCKED_USER_AGENT_PATTERNS = [
    r"bot|crawler|spider|scraper",
    r"curl|wget|postman|insomnia|httpie",
    r"python-requests|python-urllib|python-httpx|aiohttp|node-fetch|axios|go-http-client|okhttp|java/",
]


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class ModelConfig(BaseModel):
    """One entry of the ordered model fallback list."""

    name: str
    timeout_seconds: float = Field(default=20.0, gt=0)
    max_tokens: int = Field(default=800, gt=0)
    temperature: float = Field(default=0.7, ge=0, le=2)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Icebreaker Generator"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # LLM provider (any OpenAI-compatible endpoint)
    LLM_API_KEY: str = ""
    OPENAI_API_KEY: str = ""
    LLM_BASE_URL: str | None = None

    # Tried in order until one returns a structurally valid reply.
    GENERATION_MODELS: list[ModelConfig] = Field(
        default_factory=lambda: [
            ModelConfig(name="gpt-4o-mini"),
            ModelConfig(name="gpt-4o"),
        ]
    )

    # Input validation
    PROFILE_TEXT_MIN_LENGTH: int = 10
    PROFILE_TEXT_MAX_LENGTH: int = 5000
    MAX_REPEATED_CHARS: int = 10
    MIN_ALPHA_RATIO: float = 0.3

    # Request guards
    MAX_PAYLOAD_BYTES: int = 10 * 1024
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0
    BOT_PROTECTION_ENABLED: bool = True
    BLOCKED_USER_AGENT_PATTERNS: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BLOCKED_USER_AGENT_PATTERNS)
    )

    ANALYTICS_CAPACITY: int = 1000

    # Prompt personalisation
    SENDER_CONTEXT: str = DEFAULT_SENDER_CONTEXT
    SPELLING_CONVENTION: str = "Australian"

    @property
    def resolved_api_key(self) -> str:
        return self.LLM_API_KEY or self.OPENAI_API_KEY

    @property
    def api_key_configured(self) -> bool:
        return bool(self.resolved_api_key)


settings = Settings()  # type: ignore
