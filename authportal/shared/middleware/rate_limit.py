# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock

from flask import Request, current_app, jsonify, request

from authportal.shared.config import EXTENSION_KEY, SecurityConfig
from authportal.shared.logging import logger

_LIMITERS_KEY = f"{EXTENSION_KEY}.rate_limiters"


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = Lock()
        self._buckets: dict[str, Bucket] = {}
        self._last_sweep = clock()

    def _drop_old(self, bucket: Bucket, now: float) -> None:
        while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
            bucket.timestamps.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._buckets):
            bucket = self._buckets[key]
            self._drop_old(bucket, now)
            if not bucket.timestamps:
                del self._buckets[key]
        self._last_sweep = now

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            # idle clients leave empty buckets behind; clear them once per window
            if now - self._last_sweep > self._window:
                self._sweep(now)
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._buckets[key] = Bucket(deque(maxlen=self._limit))
            self._drop_old(bucket, now)
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


def _security_config() -> SecurityConfig:
    return current_app.extensions[EXTENSION_KEY].config.security


def _limiter_for(
    name: str, security: SecurityConfig, limit: int | None, window_seconds: float | None
) -> InMemoryRateLimiter:
    limiters: dict[str, InMemoryRateLimiter] = current_app.extensions.setdefault(_LIMITERS_KEY, {})
    limiter = limiters.get(name)
    if limiter is None:
        limiter = limiters[name] = InMemoryRateLimiter(
            limit or security.rate_limit_requests,
            window_seconds or security.rate_limit_window,
        )
    return limiter


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Limit calls per client address and path.

    Settings come from the running app's ``security`` config; ``limit`` and
    ``window_seconds`` override its request count and window. Each app keeps
    its own limiters.
    """

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            security = _security_config()
            if not security.enable_rate_limit:
                return f(*args, **kwargs)
            limiter = _limiter_for(f.__qualname__, security, limit, window_seconds)
            key = f"{request.path}:{_client_key(request)}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                return jsonify(
                    {"success": False, "code": "rate_limited", "errors": ["Too many requests. Please try again later."]}
                ), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
