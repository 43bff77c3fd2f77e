from __future__ import annotations

from authportal.infrastructure.cache import InMemoryTTLCache


class TickClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_get_or_set_hits_until_ttl() -> None:
    clock = TickClock()
    cache: InMemoryTTLCache[str, int] = InMemoryTTLCache(10, clock=clock)
    calls: list[int] = []

    def factory() -> int:
        calls.append(1)
        return len(calls)

    assert cache.get_or_set("k", factory) == (1, False)
    clock.now = 9.9
    assert cache.get_or_set("k", factory) == (1, True)
    clock.now = 10.0
    assert cache.get_or_set("k", factory) == (2, False)
    assert len(calls) == 2


def test_oldest_entry_evicted_at_capacity() -> None:
    cache: InMemoryTTLCache[str, str] = InMemoryTTLCache(60, max_entries=2, clock=TickClock())

    cache.get_or_set("a", lambda: "A")
    cache.get_or_set("b", lambda: "B")
    cache.get_or_set("c", lambda: "C")

    assert len(cache) == 2
    assert cache.get_or_set("a", lambda: "A2") == ("A2", False)
    assert cache.get_or_set("c", lambda: "C2") == ("C", True)
