"""Sliding-window admission control for analysis requests.

Two overlapping moving windows per caller identifier: 20 requests per
minute and 300 requests per hour, kept in ``limits`` in-memory storage for
the lifetime of the process. One controller instance is shared by every
request handler.
"""

import logging
import threading

from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from models.responses import RemainingRequests
from models.schemas import AdmissionDecision

logger = logging.getLogger(__name__)

DEFAULT_IDENTIFIER = "default"

MINUTE_LIMIT = 20
HOUR_LIMIT = 300


class RateAdmissionController:
    """Per-identifier moving-window rate limiter.

    A check tests both windows and records the request in both as one
    step, so concurrent callers cannot both take the last slot.
    """

    def __init__(self, minute_limit: int = MINUTE_LIMIT, hour_limit: int = HOUR_LIMIT):
        self.minute_limit = minute_limit
        self.hour_limit = hour_limit
        self._minute = parse(f"{minute_limit}/minute")
        self._hour = parse(f"{hour_limit}/hour")
        self._limiter = MovingWindowRateLimiter(MemoryStorage())
        self._lock = threading.Lock()

    def _reject(self, identifier: str, limit: int, period: str) -> AdmissionDecision:
        logger.warning("%s limit reached for %s", period.capitalize(), identifier)
        return AdmissionDecision(
            allowed=False,
            reason=f"Rate limit exceeded: {limit} requests per {period}",
        )

    def check(self, identifier: str = DEFAULT_IDENTIFIER) -> AdmissionDecision:
        """Admit or reject one request, recording it when admitted."""
        with self._lock:
            if not self._limiter.test(self._minute, identifier):
                return self._reject(identifier, self.minute_limit, "minute")
            if not self._limiter.test(self._hour, identifier):
                return self._reject(identifier, self.hour_limit, "hour")

            if not self._limiter.hit(self._minute, identifier):
                return self._reject(identifier, self.minute_limit, "minute")
            if not self._limiter.hit(self._hour, identifier):
                return self._reject(identifier, self.hour_limit, "hour")
            return AdmissionDecision(allowed=True)

    def remaining(self, identifier: str = DEFAULT_IDENTIFIER) -> RemainingRequests:
        """Report how many requests are left in each window. Read-only."""
        minute = self._limiter.get_window_stats(self._minute, identifier).remaining
        hour = self._limiter.get_window_stats(self._hour, identifier).remaining
        return RemainingRequests(minute=max(0, minute), hour=max(0, hour))
