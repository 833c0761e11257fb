"""
Simple Memory-based Rate Limiter (fixed window per client IP).
In production, use Redis or a dedicated middleware like slowapi.
"""
import threading
import time
from fastapi import Depends, Request
from typing import Dict, Tuple

from app.config import Settings, get_settings
from app.errors import RateLimitError

# In-memory storage: {ip: (window_start, count)}
_rate_limit_store: Dict[str, Tuple[float, int]] = {}
_store_lock = threading.Lock()

# Sweep expired windows at most this often (seconds)
PRUNE_INTERVAL = 60.0
_last_prune = 0.0


def _prune_expired(now: float, window_seconds: int):
    """Drop clients whose window has closed. Caller holds the lock."""
    global _last_prune
    if now - _last_prune < PRUNE_INTERVAL:
        return
    _last_prune = now
    expired = [ip for ip, (started, _) in _rate_limit_store.items() if now - started > window_seconds]
    for ip in expired:
        del _rate_limit_store[ip]


def check_rate_limit(ip: str, max_requests: int, window_seconds: int, now: float | None = None):
    """Count one request for ip; raise RateLimitError once the window is full."""
    now = time.time() if now is None else now

    with _store_lock:
        _prune_expired(now, window_seconds)
        started, count = _rate_limit_store.get(ip, (now, 0))

        if now - started > window_seconds:
            started, count = now, 0

        if count >= max_requests:
            raise RateLimitError(
                f"Rate limit exceeded. Try again in {int(window_seconds - (now - started))} seconds."
            )

        _rate_limit_store[ip] = (started, count + 1)


def rate_limit(requests: int | None = None, window: int | None = None):
    """
    Dependency for rate limiting; falls back to RATE_LIMIT_* settings.
    Example: Depends(rate_limit()) or Depends(rate_limit(requests=5, window=60))
    """
    def limiter(request: Request, settings: Settings = Depends(get_settings)):
        ip = request.client.host if request.client else "unknown"
        check_rate_limit(
            ip,
            requests or settings.RATE_LIMIT_REQUESTS,
            window or settings.RATE_LIMIT_WINDOW,
        )
        return True

    return limiter


def reset_rate_limits():
    """Forget all tracked clients."""
    global _last_prune
    with _store_lock:
        _rate_limit_store.clear()
        _last_prune = 0.0
