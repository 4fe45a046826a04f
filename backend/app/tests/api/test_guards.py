from app.api.deps import SlidingWindowRateLimiter, is_blocked_user_agent
from app.tests.utils import BROWSER_USER_AGENT, SAMPLE_PROFILE


def test_bot_user_agent_is_blocked(client, completions_create):
    resp = client.post(
        "/api/generate-icebreakers",
        json={"profileText": SAMPLE_PROFILE},
        headers={"User-Agent": "curl/8.4.0"},
    )

    assert resp.status_code == 403
    assert resp.json()["code"] == "BOT_DETECTED"
    completions_create.assert_not_awaited()


def test_oversized_payload_is_rejected(client, completions_create):
    resp = client.post("/api/generate-icebreakers", json={"profileText": "word " * 2200})

    assert resp.status_code == 413
    assert resp.json()["code"] == "PAYLOAD_TOO_LARGE"
    completions_create.assert_not_awaited()


def test_rate_limit_exceeded(client, rate_limiter):
    rate_limiter.max_requests = 2

    assert client.get("/api/health").status_code == 200
    assert client.get("/api/health").status_code == 200
    resp = client.get("/api/health")

    assert resp.status_code == 429
    assert resp.json() == {"error": "Rate limit exceeded", "code": "RATE_LIMIT_EXCEEDED"}
    assert int(resp.headers["retry-after"]) >= 1


def test_is_blocked_user_agent_patterns():
    assert is_blocked_user_agent("Googlebot/2.1 (+http://www.google.com/bot.html)")
    assert is_blocked_user_agent("PostmanRuntime/7.36.0")
    assert is_blocked_user_agent("python-requests/2.31.0")
    assert is_blocked_user_agent("Wget/1.21")
    assert not is_blocked_user_agent(BROWSER_USER_AGENT)


def test_sliding_window_rate_limiter_expires_old_hits():
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60)

    assert limiter.hit("a", now=0) is None
    assert limiter.hit("a", now=10) is None
    assert limiter.hit("a", now=20) == 40
    assert limiter.hit("b", now=20) is None
    assert limiter.hit("a", now=61) is None


def test_oversized_malformed_payload_is_rejected_before_parsing(client, completions_create):
    resp = client.post(
        "/api/generate-icebreakers",
        content='{"profileText": "' + "x" * 20000,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 413
    assert resp.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_bot_with_malformed_body_is_blocked_before_parsing(client, completions_create):
    resp = client.post(
        "/api/generate-icebreakers",
        content="{oops",
        headers={"Content-Type": "application/json", "User-Agent": "curl/8.4.0"},
    )

    assert resp.status_code == 403
    assert resp.json()["code"] == "BOT_DETECTED"


def test_sliding_window_rate_limiter_forgets_idle_clients():
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
    for i in range(1000):
        limiter.hit(f"client-{i}", now=0)
    assert len(limiter) == 1000

    limiter.hit("late-client", now=10000)

    assert len(limiter) == 1


def test_sliding_window_rate_limiter_keeps_active_clients_on_sweep():
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
    limiter.hit("idle", now=0)
    limiter.hit("active", now=30)

    limiter.hit("new", now=61)

    assert len(limiter) == 2
