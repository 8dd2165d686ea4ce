import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from latinium.rate_limiter import ANONYMOUS_CLIENT, SlidingWindowLimiter, client_id_from_headers


@pytest.fixture
def clock(clock, monkeypatch):
    # The limits storage reads time.time() directly
    monkeypatch.setattr(time, "time", clock)
    return clock


@pytest.fixture
def limiter(clock):
    return SlidingWindowLimiter(max_requests=10, window_seconds=60)


def test_new_client_is_not_limited(limiter):
    assert not limiter.is_limited("1.2.3.4")
    assert limiter.time_until_reset("1.2.3.4") == 0
    assert limiter.remaining("1.2.3.4") == 10


def test_limited_once_cap_is_reached(limiter, clock):
    for _ in range(9):
        limiter.record("1.2.3.4")
        clock.advance(1)
    assert not limiter.is_limited("1.2.3.4")
    limiter.record("1.2.3.4")
    assert limiter.is_limited("1.2.3.4")
    assert limiter.remaining("1.2.3.4") == 0


def test_released_after_window_passes(limiter, clock):
    for _ in range(12):
        limiter.record("1.2.3.4")
    assert limiter.is_limited("1.2.3.4")
    clock.advance(61)
    assert not limiter.is_limited("1.2.3.4")
    assert limiter.remaining("1.2.3.4") == 10


def test_clients_are_independent(limiter):
    for _ in range(10):
        limiter.record("a")
    assert limiter.is_limited("a")
    assert not limiter.is_limited("b")


def test_time_until_reset_tracks_oldest_request_in_window(limiter, clock):
    limiter.record("c")
    clock.advance(20)
    limiter.record("c")
    clock.advance(10)
    assert limiter.time_until_reset("c") == pytest.approx(30)
    clock.advance(31)
    # Oldest has expired, the second one is now the oldest
    assert limiter.time_until_reset("c") == pytest.approx(19)


def test_concurrent_records_are_all_counted(clock):
    limiter = SlidingWindowLimiter(max_requests=1000, window_seconds=60)
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: limiter.record("busy"), range(200)))
    assert limiter.remaining("busy") == 800


def test_concurrent_records_never_exceed_cap(clock):
    limiter = SlidingWindowLimiter(max_requests=25, window_seconds=60)
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: limiter.record("busy"), range(100)))
    assert limiter.remaining("busy") == 0
    assert limiter.is_limited("busy")


@pytest.mark.parametrize("max_requests, window", [(0, 60), (10, 0)])
def test_invalid_configuration_rejected(max_requests, window):
    with pytest.raises(ValueError):
        SlidingWindowLimiter(max_requests=max_requests, window_seconds=window)


def test_client_id_uses_first_forwarded_hop():
    assert client_id_from_headers({"x-forwarded-for": "203.0.113.7, 10.0.0.1"}) == "203.0.113.7"


def test_client_id_falls_back_to_anonymous():
    assert client_id_from_headers({}) == ANONYMOUS_CLIENT
    assert client_id_from_headers({"x-forwarded-for": " "}) == ANONYMOUS_CLIENT
