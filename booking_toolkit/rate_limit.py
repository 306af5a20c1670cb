"""Utilities for applying delay and rate limiting to DNS lookups."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from .domains.resolver import ResolverProtocol

T = TypeVar("T")


@dataclass
class DelayPolicy:
    """Simple policy describing artificial delay after each lookup."""

    delay_seconds: float = 0.0


class RateLimiter:
    """Token bucket style rate limiter enforcing minimum interval between calls."""

    def __init__(self, calls_per_minute: Optional[float]) -> None:
        self._interval = 60.0 / float(calls_per_minute) if calls_per_minute else 0.0
        self._lock = threading.Lock()
        self._next_available = 0.0

    @property
    def interval(self) -> float:
        return self._interval

    def acquire(self) -> None:
        if self._interval <= 0:
            return
        with self._lock:
            now = time.monotonic()
            if now < self._next_available:
                time.sleep(self._next_available - now)
                now = time.monotonic()
            self._next_available = now + self._interval


class RateLimitedResolver:
    """Wrapper that enforces delay and rate limiting when querying a resolver."""

    def __init__(
        self,
        resolver: ResolverProtocol,
        *,
        delay_policy: Optional[DelayPolicy] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        self._resolver = resolver
        self._delay_policy = delay_policy or DelayPolicy()
        self._rate_limiter = rate_limiter or RateLimiter(None)

    @property
    def wrapped(self) -> ResolverProtocol:
        return self._resolver

    def resolve_txt(self, name: str) -> List[List[str]]:
        return self._call(self._resolver.resolve_txt, name)

    def resolve_cname(self, name: str) -> List[str]:
        return self._call(self._resolver.resolve_cname, name)

    def resolve_address(self, name: str) -> List[str]:
        return self._call(self._resolver.resolve_address, name)

    def _call(self, lookup: Callable[[str], T], name: str) -> T:
        self._rate_limiter.acquire()
        try:
            return lookup(name)
        finally:
            if self._delay_policy.delay_seconds > 0:
                time.sleep(self._delay_policy.delay_seconds)

    def __getattr__(self, item):  # pragma: no cover - simple delegation
        return getattr(self._resolver, item)
