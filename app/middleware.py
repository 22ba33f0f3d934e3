"""
HTTP middlewares: per-client rate limiting and hardening response headers.
"""
import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.logger import get_logger

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class RateLimiter:
    """
    Fixed-window request counter keyed by client address.

    The counter table is the only process-wide mutable state of the API.
    """

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_prune = 0.0

    def hit(self, key: str, now: Optional[float] = None) -> Tuple[bool, int, float]:
        """
        Count one request for `key`.

        Returns (allowed, remaining, reset_at) where reset_at is the time at
        which the current window ends.
        """
        now = time.monotonic() if now is None else now
        self._prune(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)

        remaining = max(self.max_requests - count, 0)
        return count <= self.max_requests, remaining, started + self.window_seconds

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def _prune(self, now: float) -> None:
        if now - self._last_prune < self.window_seconds:
            return
        self._last_prune = now
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for k in expired:
            del self._windows[k]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects a client with 429 once it exceeds the limit inside the current window."""

    def __init__(self, app, limiter: RateLimiter, clock: Callable[[], float] = time.monotonic):
        super().__init__(app)
        self.limiter = limiter
        self.clock = clock

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        now = self.clock()
        allowed, remaining, reset_at = self.limiter.hit(client, now=now)
        headers = {
            "X-RateLimit-Limit": str(self.limiter.max_requests),
            "X-RateLimit-Remaining": str(remaining),
        }

        if not allowed:
            retry_after = max(int(reset_at - now + 0.999), 1)
            logger.warning(f"Rate limit exceeded for {client} on {request.method} {request.url.path}")
            headers["Retry-After"] = str(retry_after)
            return JSONResponse(status_code=429, content={"message": RATE_LIMIT_MESSAGE}, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds conservative security headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
