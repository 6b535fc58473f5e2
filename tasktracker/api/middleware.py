import logging
import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import INTERNAL_ERROR_MESSAGE, error_response

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SlidingWindowLimiter:
    """
    Allow at most ``max_requests`` hits per key within any ``window_seconds``
    span. Hit times are kept per key and pruned as the window slides; once
    per window, keys with no recent hits are dropped.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, cutoff: float) -> None:
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]

    def hit(self, key: str) -> Tuple[bool, int, float]:
        """Record a hit. Returns (allowed, remaining, retry_after_seconds)."""
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()

            if len(hits) >= self.max_requests:
                retry_after = hits[0] + self.window_seconds - now
                return False, 0, max(retry_after, 0.0)

            hits.append(now)
            return True, self.max_requests - len(hits), 0.0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        allowed, remaining, retry_after = self.limiter.hit(client_ip)

        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_ip)
            response = error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                RATE_LIMIT_MESSAGE,
                headers={"Retry-After": str(math.ceil(retry_after))},
            )
        else:
            response = await call_next(request)

        response.headers["RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["RateLimit-Remaining"] = str(remaining)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class InternalErrorMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into the generic 500 body inside the stack,
    so the outer middlewares still add their headers."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
