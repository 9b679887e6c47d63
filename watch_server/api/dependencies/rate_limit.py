"""Per-client rate limiting dependency.

Each client address owns a token bucket refilled continuously up to
RATE_LIMIT_PER_MINUTE tokens; a request spends one token.
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status

from watch_server.settings import settings

# Buckets idle for this long are full again and can be dropped
_IDLE_SECONDS = 60.0


@dataclass
class RateLimitBucket:
    """Token bucket of one client.

    Attributes:
        tokens: Requests currently available.
        updated_at: Monotonic time of the last refill.
    """

    tokens: float
    updated_at: float


class RateLimiter:
    """Thread-safe in-memory token bucket limiter.

    Attributes:
        _capacity: Bucket size, equal to requests per minute.
        _refill_per_second: Tokens added per second.
        _buckets: Client key to bucket mapping.
    """

    def __init__(self, requests_per_minute: int) -> None:
        """Initialize rate limiter.

        Args:
            requests_per_minute: Sustained request limit per client.
        """
        self._capacity = float(requests_per_minute)
        self._refill_per_second = requests_per_minute / 60.0
        self._buckets: dict[str, RateLimitBucket] = {}
        self._lock = Lock()

    def acquire(self, client: str) -> int | None:
        """Spend one token for the client.

        Args:
            client: Client key (IP address).

        Returns:
            Tokens left after spending, or None when the bucket is empty.
        """
        now = time.monotonic()
        with self._lock:
            self._evict_idle(now)
            bucket = self._buckets.setdefault(
                client,
                RateLimitBucket(tokens=self._capacity, updated_at=now),
            )
            elapsed = now - bucket.updated_at
            bucket.tokens = min(self._capacity, bucket.tokens + elapsed * self._refill_per_second)
            bucket.updated_at = now
            if bucket.tokens < 1.0:
                return None
            bucket.tokens -= 1.0
            return int(bucket.tokens)

    def _evict_idle(self, now: float) -> None:
        idle = [
            key
            for key, bucket in self._buckets.items()
            if now - bucket.updated_at > _IDLE_SECONDS
        ]
        for key in idle:
            del self._buckets[key]

    def reset(self) -> None:
        """Forget every client."""
        with self._lock:
            self._buckets.clear()


_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the process-wide rate limiter."""
    global _rate_limiter  # noqa: PLW0603
    if _rate_limiter is None:
        _rate_limiter = RateLimiter(settings.security.rate_limit_per_minute)
    return _rate_limiter


def client_address(request: Request) -> str:
    """Client address, honoring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def check_rate_limit(
    request: Request,
    response: Response,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """Reject the request once the client's bucket is empty.

    Raises:
        HTTPException: 429 when the limit is exceeded.
    """
    remaining = limiter.acquire(client_address(request))
    if remaining is None:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Try again later.",
            headers={"Retry-After": "60"},
        )
    response.headers["X-RateLimit-Remaining"] = str(remaining)
