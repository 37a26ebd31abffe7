#!/usr/bin/env python3
"""
Outbound send rate limiting.

Both limiters keep a sliding window of recent send timestamps and *delay*
the caller until a slot is free; nothing is ever dropped.

- SlidingWindowRateLimiter: process-local, thread-safe
- RedisSlidingWindowRateLimiter: sorted set in Redis, shared by all workers
"""

import logging
import threading
import time
import uuid
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Optional

from redis import Redis

logger = logging.getLogger(__name__)


class RateLimiter(ABC):
    @abstractmethod
    def acquire(self) -> float:
        """Block until a send is allowed. Returns the seconds spent waiting."""
        pass


class SlidingWindowRateLimiter(RateLimiter):
    """
    At most ``max_requests`` sends per ``window_seconds``.

    ``clock`` and ``sleep`` are injectable so tests can drive time manually.
    """

    def __init__(
        self,
        max_requests: int = 2,
        window_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._sent: Deque[float] = deque()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        window_start = now - self.window_seconds
        while self._sent and self._sent[0] <= window_start:
            self._sent.popleft()

    def acquire(self) -> float:
        waited = 0.0
        # Held across the sleep so concurrent senders queue up in order
        with self._lock:
            now = self._clock()
            self._evict(now)

            if len(self._sent) >= self.max_requests:
                wait = self._sent[0] + self.window_seconds - now
                if wait > 0:
                    logger.info(
                        f"Rate limit: waiting {wait * 1000:.0f}ms before next send "
                        f"(max {self.max_requests}/{self.window_seconds:g}s)."
                    )
                    self._sleep(wait)
                    waited = wait
                self._evict(self._clock())

            self._sent.append(self._clock())
        return waited


class RedisSlidingWindowRateLimiter(RateLimiter):
    """
    Sliding window kept in a Redis sorted set so several worker processes
    share one send budget.
    """

    KEY_PREFIX = "notification:rate_window:"

    def __init__(
        self,
        redis_url: str = 'redis://localhost:6379/0',
        max_requests: int = 2,
        window_seconds: float = 1.0,
        channel_type: str = 'email',
        redis_client: Optional[Redis] = None,
    ):
        self.redis = redis_client or Redis.from_url(redis_url)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key = f"{self.KEY_PREFIX}{channel_type}"

    def acquire(self) -> float:
        waited = 0.0
        member = uuid.uuid4().hex
        while True:
            now = time.time()
            pipe = self.redis.pipeline()
            pipe.zremrangebyscore(self.key, 0, now - self.window_seconds)
            pipe.zadd(self.key, {member: now})
            pipe.zcard(self.key)
            pipe.expire(self.key, max(1, int(self.window_seconds * 2)))
            _, _, count, _ = pipe.execute()

            if count <= self.max_requests:
                return waited

            # Over budget: give the slot back and wait for the oldest entry to expire
            self.redis.zrem(self.key, member)
            oldest = self.redis.zrange(self.key, 0, 0, withscores=True)
            wait = self.window_seconds / self.max_requests
            if oldest:
                wait = max(0.01, oldest[0][1] + self.window_seconds - now)

            time.sleep(wait)
            waited += wait
