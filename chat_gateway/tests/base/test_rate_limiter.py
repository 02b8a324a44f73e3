from __future__ import annotations

import threading

import pytest

from chat_gateway.base.resilience import RateLimiter, RateLimiterConfig, create_rate_limiter, rate_limiter


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def test_sliding_window_scenario(clock):
    limiter = RateLimiter(clock=clock)
    assert all(limiter.check_limit("k") for _ in range(60))
    assert limiter.check_limit("k") is False
    assert limiter.get_remaining_requests("k") == 0
    assert limiter.get_wait_time_ms("k") > 0
    clock.advance(60001)
    assert limiter.check_limit("k") is True


def test_rejection_is_not_recorded(clock):
    limiter = RateLimiter(RateLimiterConfig(max_requests_per_minute=2, window_size_ms=1000), clock=clock)
    assert limiter.check_limit("k")
    clock.advance(100)
    assert limiter.check_limit("k")
    for _ in range(5):
        assert not limiter.check_limit("k")
    # oldest admission expires 1000ms after it was recorded
    assert limiter.get_wait_time_ms("k") == 900
    clock.advance(901)
    assert limiter.get_remaining_requests("k") == 1


def test_wait_time_zero_under_limit(clock):
    limiter = RateLimiter(clock=clock)
    assert limiter.get_wait_time_ms("never-seen") == 0
    limiter.check_limit("k")
    assert limiter.get_wait_time_ms("k") == 0


def test_remaining_for_unknown_key(clock):
    assert RateLimiter(clock=clock).get_remaining_requests("x") == 60


def test_keys_are_independent(clock):
    limiter = RateLimiter(RateLimiterConfig(max_requests_per_minute=1), clock=clock)
    assert limiter.check_limit("a")
    assert not limiter.check_limit("a")
    assert limiter.check_limit("b")


def test_reset_and_clear(clock):
    limiter = RateLimiter(RateLimiterConfig(max_requests_per_minute=1), clock=clock)
    limiter.check_limit("a")
    limiter.check_limit("b")
    limiter.reset_limit("a")
    assert limiter.check_limit("a")
    assert not limiter.check_limit("b")
    limiter.clear_all()
    assert limiter.tracked_keys == 0
    assert limiter.check_limit("b")


def test_expired_records_are_evicted(clock):
    limiter = RateLimiter(RateLimiterConfig(window_size_ms=1000), clock=clock)
    for key in ("a", "b", "c"):
        limiter.check_limit(key)
    assert limiter.tracked_keys == 3
    clock.advance(1000)
    for key in ("a", "b", "c"):
        assert limiter.get_remaining_requests(key) == 60
    assert limiter.tracked_keys == 0


def test_timestamp_at_window_boundary_is_expired(clock):
    limiter = RateLimiter(RateLimiterConfig(max_requests_per_minute=1, window_size_ms=1000), clock=clock)
    limiter.check_limit("k")
    clock.advance(999)
    assert not limiter.check_limit("k")
    assert limiter.get_wait_time_ms("k") == 1
    clock.advance(1)
    assert limiter.check_limit("k")


def test_update_and_get_config(clock):
    limiter = RateLimiter(clock=clock)
    limiter.update_config(max_requests_per_minute=5)
    cfg = limiter.get_config()
    assert cfg == RateLimiterConfig(max_requests_per_minute=5, window_size_ms=60000)
    cfg.max_requests_per_minute = 1
    assert limiter.get_config().max_requests_per_minute == 5
    with pytest.raises(TypeError):
        limiter.update_config(burst=3)


def test_constructor_copies_config(clock):
    cfg = RateLimiterConfig(max_requests_per_minute=3)
    limiter = RateLimiter(cfg, clock=clock)
    cfg.max_requests_per_minute = 100
    assert limiter.get_config().max_requests_per_minute == 3


def test_threads_never_over_admit():
    limiter = RateLimiter(RateLimiterConfig(max_requests_per_minute=50))
    admitted = []

    def worker() -> None:
        for _ in range(20):
            if limiter.check_limit("shared"):
                admitted.append(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(admitted) == 50


def test_default_instance():
    assert isinstance(rate_limiter, RateLimiter)


def test_create_rate_limiter_reads_settings(monkeypatch, clock):
    monkeypatch.setenv("CHAT_GATEWAY_RATE_LIMIT_RPM", "2")
    monkeypatch.setenv("CHAT_GATEWAY_RATE_LIMIT_WINDOW_MS", "500")
    limiter = create_rate_limiter(clock=clock)
    assert limiter.get_config() == RateLimiterConfig(max_requests_per_minute=2, window_size_ms=500)
    assert limiter.check_limit("k") and limiter.check_limit("k")
    assert not limiter.check_limit("k")
    clock.advance(500)
    assert limiter.check_limit("k")
