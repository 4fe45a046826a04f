from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.analytics import AnalyticsRecorder, get_analytics_recorder
from app.api.deps import SlidingWindowRateLimiter, get_rate_limiter
from app.main import app
from app.tests.utils import BROWSER_USER_AGENT, make_openai_client


@pytest.fixture
def completions_create() -> Generator[AsyncMock, None, None]:
    """Patch AsyncOpenAI and expose the mocked `chat.completions.create`."""
    create = AsyncMock()
    with patch("app.agent.llm_client.AsyncOpenAI", return_value=make_openai_client(create)):
        yield create


@pytest.fixture
def analytics() -> AnalyticsRecorder:
    return AnalyticsRecorder(capacity=1000)


@pytest.fixture
def rate_limiter() -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_requests=10, window_seconds=60)


@pytest.fixture
def client(
    analytics: AnalyticsRecorder, rate_limiter: SlidingWindowRateLimiter
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_analytics_recorder] = lambda: analytics
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    with TestClient(app, headers={"User-Agent": BROWSER_USER_AGENT}) as c:
        yield c
    app.dependency_overrides.clear()
