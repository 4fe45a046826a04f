import logging
import math
import re
import threading
import time
from collections import deque
from typing import Annotated

from fastapi import Depends, Request

from app.agent.icebreaker_agent import IcebreakerAgent
from app.analytics import AnalyticsRecorder, get_analytics_recorder
from app.core.config import settings
from app.core.exceptions import APIError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Per-client request counter over a sliding time window."""

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep: float | None = None

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        """Forget clients whose most recent hit has left the window."""
        stale = [key for key, window in self._hits.items() if not window or now - window[-1] >= self.window_seconds]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str, now: float | None = None) -> float | None:
        """Register a request; returns seconds to wait when over the limit, else None."""
        now = time.monotonic() if now is None else now
        with self._lock:
            if self._last_sweep is None:
                self._last_sweep = now
            elif now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            window = self._hits.setdefault(key, deque())
            while window and now - window[0] >= self.window_seconds:
                window.popleft()
            if len(window) >= self.max_requests:
                return self.window_seconds - (now - window[0])
            window.append(now)
            return None

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = None


_rate_limiter_instance: SlidingWindowRateLimiter | None = None

def get_rate_limiter() -> SlidingWindowRateLimiter:
    global _rate_limiter_instance
    if _rate_limiter_instance is None:
        _rate_limiter_instance = SlidingWindowRateLimiter(
            max_requests=settings.RATE_LIMIT_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )
    return _rate_limiter_instance


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def enforce_rate_limit(
    request: Request,
    limiter: Annotated[SlidingWindowRateLimiter, Depends(get_rate_limiter)],
) -> None:
    retry_after = limiter.hit(_client_key(request))
    if retry_after is not None:
        logger.warning("Rate limit exceeded for client %s", _client_key(request))
        raise APIError(
            status_code=429,
            code="RATE_LIMIT_EXCEEDED",
            message="Rate limit exceeded",
            headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
        )


async def enforce_payload_limit(request: Request) -> None:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.MAX_PAYLOAD_BYTES:
        raise APIError(status_code=413, code="PAYLOAD_TOO_LARGE", message="Request payload too large")
    body = await request.body()
    if len(body) > settings.MAX_PAYLOAD_BYTES:
        raise APIError(status_code=413, code="PAYLOAD_TOO_LARGE", message="Request payload too large")


def is_blocked_user_agent(user_agent: str, patterns: list[str] | None = None) -> bool:
    patterns = settings.BLOCKED_USER_AGENT_PATTERNS if patterns is None else patterns
    return any(re.search(pattern, user_agent, re.IGNORECASE) for pattern in patterns)


def block_bots(request: Request) -> None:
    if not settings.BOT_PROTECTION_ENABLED:
        return
    user_agent = request.headers.get("user-agent", "")
    if is_blocked_user_agent(user_agent):
        logger.warning("Blocked request from user agent %r", user_agent)
        raise APIError(status_code=403, code="BOT_DETECTED", message="Automated requests are not allowed")


def get_icebreaker_agent() -> IcebreakerAgent:
    return IcebreakerAgent()


AnalyticsDep = Annotated[AnalyticsRecorder, Depends(get_analytics_recorder)]
IcebreakerAgentDep = Annotated[IcebreakerAgent, Depends(get_icebreaker_agent)]
