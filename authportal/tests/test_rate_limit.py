from __future__ import annotations

from authportal.shared.middleware.rate_limit import InMemoryRateLimiter


class TickClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_limiter_blocks_after_limit_within_window() -> None:
    clock = TickClock()
    limiter = InMemoryRateLimiter(limit=2, window_seconds=60, clock=clock)

    assert limiter.allow("ip")
    assert limiter.allow("ip")
    assert not limiter.allow("ip")
    assert limiter.allow("other-ip")


def test_limiter_recovers_after_window() -> None:
    clock = TickClock()
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10, clock=clock)

    assert limiter.allow("ip")
    clock.now = 5
    assert not limiter.allow("ip")
    clock.now = 10.5
    assert limiter.allow("ip")


def test_limiter_drops_idle_buckets() -> None:
    clock = TickClock()
    limiter = InMemoryRateLimiter(limit=3, window_seconds=10, clock=clock)

    assert limiter.allow("a")
    assert limiter.allow("b")
    clock.now = 20
    assert limiter.allow("c")

    assert list(limiter._buckets) == ["c"]
