"""
Rate Limiter - Control request frequency per client.

Every answered question costs an LLM call (and sometimes a vector store
search), so question endpoints are limited per session id, or per client
address when the browser did not send one.
"""
from collections import deque
from datetime import datetime, timedelta
from typing import Deque, Dict, Optional, Tuple
import threading

from src.core.exceptions import RateLimitExceeded
from src.core.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding window rate limiter.

    Example:
        >>> limiter = RateLimiter(requests_per_minute=2)
        >>> limiter.is_allowed("abc")
        (True, 1)
        >>> limiter.is_allowed("abc")
        (True, 0)
        >>> limiter.is_allowed("abc")
        (False, 0)
    """

    def __init__(
        self,
        requests_per_minute: int = 30,
        window_seconds: int = 60,
        cleanup_interval_seconds: int = 300,
    ):
        self.limit = requests_per_minute
        self.window = timedelta(seconds=window_seconds)
        self.cleanup_interval = timedelta(seconds=cleanup_interval_seconds)

        self._requests: Dict[str, Deque[datetime]] = {}
        self._lock = threading.RLock()
        self._last_cleanup = datetime.utcnow()

        logger.info(f"RateLimiter initialized: {requests_per_minute} requests/minute")

    def is_allowed(self, identifier: str) -> Tuple[bool, int]:
        """
        Record a request for the identifier if the window allows it.

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        with self._lock:
            now = datetime.utcnow()
            if now - self._last_cleanup >= self.cleanup_interval:
                self._cleanup(now)
            timestamps = self._prune(identifier, now)

            if len(timestamps) >= self.limit:
                logger.warning(f"Rate limit exceeded for: {identifier[:8]}...")
                return False, 0

            timestamps.append(now)
            return True, self.limit - len(timestamps)

    def check(self, identifier: str) -> int:
        """
        Like is_allowed, but raises when the limit is hit.

        Returns:
            Remaining requests in the current window

        Raises:
            RateLimitExceeded: with the seconds until the oldest request expires
        """
        allowed, remaining = self.is_allowed(identifier)
        if not allowed:
            reset_at = self.get_reset_time(identifier)
            retry_after = max(1, int((reset_at - datetime.utcnow()).total_seconds()))
            raise RateLimitExceeded(retry_after=retry_after)
        return remaining

    def get_reset_time(self, identifier: str) -> datetime:
        """Get when the oldest request in the window expires."""
        with self._lock:
            timestamps = self._requests.get(identifier)
            if not timestamps:
                return datetime.utcnow()
            return timestamps[0] + self.window

    def reset(self, identifier: Optional[str] = None) -> None:
        """Forget one identifier, or everything."""
        with self._lock:
            if identifier is None:
                self._requests.clear()
            else:
                self._requests.pop(identifier, None)

    def cleanup(self) -> int:
        """Forget identifiers with no requests left in the window."""
        with self._lock:
            return self._cleanup(datetime.utcnow())

    def _cleanup(self, now: datetime) -> int:
        cutoff = now - self.window
        stale = []
        for identifier, timestamps in self._requests.items():
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()
            if not timestamps:
                stale.append(identifier)

        for identifier in stale:
            del self._requests[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(stale)} removed, {len(self._requests)} active")
        return len(stale)

    def _prune(self, identifier: str, now: datetime) -> Deque[datetime]:
        """Drop timestamps that fell out of the window."""
        timestamps = self._requests.setdefault(identifier, deque())
        cutoff = now - self.window
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()
        return timestamps


_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the global rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        from src.core.config import get_settings
        _rate_limiter = RateLimiter(
            requests_per_minute=get_settings().rate_limit_per_minute
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Drop the global limiter (useful for testing)."""
    global _rate_limiter
    _rate_limiter = None
