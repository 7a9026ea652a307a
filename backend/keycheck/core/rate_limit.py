from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock

DEFAULT_WINDOW_SECONDS = 60.0
DEFAULT_MAX_REQUESTS = 20


@dataclass
class _Bucket:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_at: float


_buckets_lock = Lock()
_buckets: dict[str, _Bucket] = {}


def _evict_expired(ts: float) -> None:
    # Caller holds _buckets_lock.
    expired = [key for key, bucket in _buckets.items() if bucket.reset_at <= ts]
    for key in expired:
        del _buckets[key]


def check_simple_rate_limit(
    identity: str,
    *,
    max_requests: int = DEFAULT_MAX_REQUESTS,
    window_seconds: float = DEFAULT_WINDOW_SECONDS,
    now: float | None = None,
) -> RateLimitDecision:
    """Fixed-window counter keyed by client identity.

    A request is counted only when it is allowed; rejected requests do not
    extend the window.
    """

    ts = time.monotonic() if now is None else float(now)
    with _buckets_lock:
        bucket = _buckets.get(identity)
        if bucket is None or bucket.reset_at <= ts:
            _evict_expired(ts)
            reset_at = ts + window_seconds
            _buckets[identity] = _Bucket(count=1, reset_at=reset_at)
            return RateLimitDecision(
                allowed=True,
                remaining=max_requests - 1,
                reset_at=reset_at,
            )

        if bucket.count >= max_requests:
            return RateLimitDecision(allowed=False, remaining=0, reset_at=bucket.reset_at)

        bucket.count += 1
        return RateLimitDecision(
            allowed=True,
            remaining=max_requests - bucket.count,
            reset_at=bucket.reset_at,
        )


def _reset_rate_limit_state_for_tests() -> None:
    with _buckets_lock:
        _buckets.clear()


__all__ = ["RateLimitDecision", "check_simple_rate_limit"]
