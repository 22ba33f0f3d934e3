# tests/test_rate_limit.py

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.middleware import RATE_LIMIT_MESSAGE, RateLimiter, RateLimitMiddleware


def test_limiter_fixed_window() -> None:
    limiter = RateLimiter(max_requests=2, window_seconds=60)

    assert limiter.hit("1.2.3.4", now=0)[0]
    assert limiter.hit("1.2.3.4", now=10)[0]
    allowed, remaining, reset_at = limiter.hit("1.2.3.4", now=20)
    assert not allowed
    assert remaining == 0
    assert reset_at == 60

    # other clients have their own counters
    assert limiter.hit("5.6.7.8", now=20)[0]

    # a new window starts once the old one has elapsed
    assert limiter.hit("1.2.3.4", now=60)[0]


def test_limiter_prunes_expired_windows() -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=1)
    for i in range(5):
        limiter.hit(f"client-{i}", now=0)
    limiter.hit("late", now=5)
    assert list(limiter._windows) == ["late"]


def test_middleware_returns_429() -> None:
    clock = {"now": 0.0}
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        limiter=RateLimiter(max_requests=2, window_seconds=60),
        clock=lambda: clock["now"],
    )

    @app.get("/ping")
    def ping():
        return {"ok": True}

    client = TestClient(app)
    first = client.get("/ping")
    assert first.status_code == 200
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert client.get("/ping").status_code == 200

    blocked = client.get("/ping")
    assert blocked.status_code == 429
    assert blocked.json() == {"message": RATE_LIMIT_MESSAGE}
    assert blocked.headers["Retry-After"] == "60"

    clock["now"] = 61.0
    assert client.get("/ping").status_code == 200
