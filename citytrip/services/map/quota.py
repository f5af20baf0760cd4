"""
Daily quota shared by all mapping provider endpoints, with per-endpoint usage
"""
import logging
from collections import Counter
from datetime import date
from typing import Dict, Optional

from citytrip.config import settings

logger = logging.getLogger(__name__)


class ProviderQuota:
    """Counts provider calls per endpoint against one daily limit.

    Usage rolls over at local midnight. The limit covers the sum of all
    endpoints, since the provider bills every request against the same key.
    """

    def __init__(self, daily_limit: Optional[int] = None):
        self.daily_limit = (
            daily_limit if daily_limit is not None else settings.max_api_calls_per_day
        )
        self.day = date.today()
        self.usage: Counter = Counter()

    def _roll_over(self) -> None:
        today = date.today()
        if today != self.day:
            logger.info(f"Provider usage for {self.day.isoformat()}: {dict(self.usage)}")
            self.usage.clear()
            self.day = today

    @property
    def used(self) -> int:
        self._roll_over()
        return sum(self.usage.values())

    def remaining(self) -> int:
        return max(0, self.daily_limit - self.used)

    def acquire(self, endpoint: str) -> bool:
        """Count one call to `endpoint`; False once today's limit is reached"""
        if self.remaining() <= 0:
            logger.warning(f"Provider quota of {self.daily_limit} exhausted, {endpoint} call refused")
            return False
        self.usage[endpoint] += 1
        return True

    def snapshot(self) -> Dict:
        self._roll_over()
        return {
            "day": self.day.isoformat(),
            "limit": self.daily_limit,
            "remaining": self.remaining(),
            "by_endpoint": dict(self.usage),
        }


provider_quota = ProviderQuota()
