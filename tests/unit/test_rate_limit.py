from datetime import UTC, datetime, timedelta

import pytest

from teamsite.api.rate_limit import RateLimiter
from teamsite.config.models import RateLimitRules, RateLimitWindow


class ManualClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def rules():
    return RateLimitRules(
        login=RateLimitWindow(window_seconds=60, max_requests=3),
        contact=RateLimitWindow(window_seconds=60, max_requests=2),
        application=RateLimitWindow(window_seconds=3600, max_requests=1),
    )


@pytest.fixture
def limiter(rules, clock):
    return RateLimiter(rules, time_port=clock)


def test_allow_request_basic(limiter):
    assert limiter.allow_request("k", 60, 2) is True
    assert limiter.allow_request("k", 60, 2) is True
    assert limiter.allow_request("k", 60, 2) is False  # Limit reached


def test_window_slides(limiter, clock):
    assert limiter.allow_request("k", 60, 1) is True
    assert limiter.allow_request("k", 60, 1) is False

    clock.now += timedelta(seconds=61)
    assert limiter.allow_request("k", 60, 1) is True


def test_zero_limit_blocks(limiter):
    assert limiter.allow_request("k", 60, 0) is False


def test_check_login(limiter):
    # Configured max=3
    ip = "127.0.0.1"
    assert limiter.check_login(ip) is True
    assert limiter.check_login(ip) is True
    assert limiter.check_login(ip) is True
    assert limiter.check_login(ip) is False


def test_actions_and_clients_are_separate(limiter):
    assert limiter.check_contact("10.0.0.1") is True
    assert limiter.check_contact("10.0.0.1") is True
    assert limiter.check_contact("10.0.0.1") is False

    assert limiter.check_contact("10.0.0.2") is True
    assert limiter.check_application("10.0.0.1") is True
    assert limiter.check_application("10.0.0.1") is False
