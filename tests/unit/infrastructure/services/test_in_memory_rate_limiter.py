"""Tests for the in-memory fixed-window rate limiter."""

import pytest

from panel_auth.domain.value_objects.rate_limit import RateLimitState
from panel_auth.infrastructure.services import InMemoryRateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(500.0)


@pytest.fixture
def limiter(clock):
    return InMemoryRateLimiter(clock=clock)


class TestInMemoryRateLimiter:
    @pytest.mark.asyncio
    async def test_hit_counts_attempts(self, limiter):
        assert await limiter.hit("key", 60) == 1
        assert await limiter.hit("key", 60) == 2
        assert await limiter.attempts("key") == 2

    @pytest.mark.asyncio
    async def test_too_many_attempts_at_budget(self, limiter):
        await limiter.hit("key", 60)
        assert not await limiter.too_many_attempts("key", 2)

        await limiter.hit("key", 60)
        assert await limiter.too_many_attempts("key", 2)

    @pytest.mark.asyncio
    async def test_available_in_counts_down(self, limiter, clock):
        await limiter.hit("key", 60)

        clock.now += 20.5

        assert await limiter.available_in("key") == 40

    @pytest.mark.asyncio
    async def test_window_resets_after_decay(self, limiter, clock):
        await limiter.hit("key", 60)
        await limiter.hit("key", 60)

        clock.now += 60

        assert await limiter.attempts("key") == 0
        assert await limiter.available_in("key") == 0
        assert await limiter.hit("key", 60) == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, limiter):
        await limiter.hit("a", 60)
        await limiter.hit("a", 60)

        assert await limiter.attempts("b") == 0
        assert not await limiter.too_many_attempts("b", 2)

    @pytest.mark.asyncio
    async def test_clear(self, limiter):
        await limiter.hit("key", 60)

        await limiter.clear("key")

        assert await limiter.attempts("key") == 0

    @pytest.mark.asyncio
    async def test_cleanup_expired_windows(self, limiter, clock):
        await limiter.hit("short", 10)
        await limiter.hit("long", 100)

        clock.now += 50

        assert await limiter.cleanup_expired_windows() == 1
        assert await limiter.attempts("long") == 1

    @pytest.mark.asyncio
    async def test_hit_drops_closed_windows_of_other_keys(self, clock):
        state = RateLimitState()
        limiter = InMemoryRateLimiter(rate_limit_state=state, clock=clock)
        for client in range(1000):
            await limiter.hit(f"client-{client}", 60)

        clock.now += 60
        await limiter.hit("latecomer", 60)

        assert len(state) == 1
