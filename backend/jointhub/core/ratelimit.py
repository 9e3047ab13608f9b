# jointhub/core/ratelimit.py
"""
Fixed-window request limiter for the /api surface.

The counter is per process and shared by every caller. All mutation happens
on the event loop with no await between the read and the write, which keeps
the count consistent across concurrent requests without a lock.
"""
import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("uvicorn.error")

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class FixedWindowRateLimiter:
    """Allows ``max_requests`` hits per ``window_seconds``, then refuses until the window rolls."""

    def __init__(self, max_requests: int, window_seconds: float = 60.0,
                 clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._window_start = clock()
        self._count = 0

    def hit(self) -> bool:
        """Count one request; False means it is over the limit."""
        now = self._clock()
        if now - self._window_start >= self.window_seconds:
            self._window_start = now
            self._count = 0
        self._count += 1
        return self._count <= self.max_requests

    def retry_after(self) -> int:
        remaining = self.window_seconds - (self._clock() - self._window_start)
        return max(1, int(remaining + 0.999))

    def reset(self) -> None:
        self._window_start = self._clock()
        self._count = 0


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: FixedWindowRateLimiter, prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(self.prefix) and not self.limiter.hit():
            logger.warning("[ratelimit] Refused %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE, "status": "RATE_LIMITED"},
                headers={"Retry-After": str(self.limiter.retry_after())},
            )
        return await call_next(request)
