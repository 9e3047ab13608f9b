"""
Unit tests for core.ratelimit.FixedWindowRateLimiter.
"""
from jointhub.core.ratelimit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit_within_window():
    limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
    assert [limiter.hit() for _ in range(4)] == [True, True, True, False]


def test_window_rollover_resets_count():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    assert limiter.hit() is True
    assert limiter.hit() is False
    clock.now += 59
    assert limiter.hit() is False
    clock.now += 1
    assert limiter.hit() is True


def test_retry_after_counts_down_to_window_end():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.hit()
    clock.now += 20
    assert limiter.retry_after() == 40
    clock.now += 39.5
    assert limiter.retry_after() == 1


def test_reset_clears_count():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.hit()
    assert limiter.hit() is False
    limiter.reset()
    assert limiter.hit() is True
