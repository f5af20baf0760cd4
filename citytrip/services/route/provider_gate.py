from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional, TypeVar

from citytrip.config import settings
from citytrip.exceptions import ProviderUnavailableError

T = TypeVar("T")


class ProviderGate:
    """
    Bounds concurrent provider calls for one planning request and applies
    the request's deadline to every call uniformly.
    """

    def __init__(
        self,
        max_concurrency: Optional[int] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        limit = settings.max_concurrent_provider_calls if max_concurrency is None else max_concurrency
        self._semaphore = asyncio.Semaphore(max(1, limit))
        self._deadline = None if timeout_s is None else time.monotonic() + timeout_s

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return self._deadline - time.monotonic()

    async def call(self, func: Callable[..., Awaitable[T]], *args) -> T:
        async with self._semaphore:
            remaining = self.remaining()
            if remaining is not None and remaining <= 0:
                raise ProviderUnavailableError("planning deadline exceeded")
            try:
                return await asyncio.wait_for(func(*args), timeout=remaining)
            except asyncio.TimeoutError as e:
                raise ProviderUnavailableError("provider call timed out") from e
