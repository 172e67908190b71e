"""
Tests for ai/retry.py - rate-limit backoff around model calls.
"""
import pytest
from types import SimpleNamespace

from ai.retry import RetryPolicy, call_with_retry, is_rate_limit_error
from conftest import RateLimitError


class Flaky:
    """Fails ``failures`` times with ``error`` then returns ``value``."""

    def __init__(self, failures, error, value="ok"):
        self.failures = failures
        self.error = error
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return self.value


class TestRetryPolicy:

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.retries == 3
        assert policy.initial_delay == 2.0
        assert policy.backoff_factor == 2.0

    def test_delays_double(self):
        policy = RetryPolicy()
        assert [policy.delay_for(n) for n in range(3)] == [2.0, 4.0, 8.0]


class TestIsRateLimitError:

    def test_status_code_attribute(self):
        assert is_rate_limit_error(RateLimitError("slow down"))

    def test_status_attribute(self):
        exc = Exception("quota")
        exc.status = 429
        assert is_rate_limit_error(exc)

    def test_response_status_code(self):
        exc = Exception("http error")
        exc.response = SimpleNamespace(status_code=429)
        assert is_rate_limit_error(exc)

    def test_message_marker(self):
        assert is_rate_limit_error(RuntimeError("Error code: 429 - Too Many Requests"))

    def test_other_errors(self):
        assert not is_rate_limit_error(ValueError("bad json"))
        exc = Exception("server error")
        exc.status_code = 500
        assert not is_rate_limit_error(exc)


class TestCallWithRetry:

    def test_success_first_try(self, sleeper):
        op = Flaky(0, RateLimitError())
        assert call_with_retry(op, RetryPolicy(), sleep=sleeper) == "ok"
        assert op.calls == 1
        assert sleeper.delays == []

    def test_non_rate_limit_error_is_not_retried(self, sleeper):
        error = ValueError("boom")
        op = Flaky(5, error)
        with pytest.raises(ValueError) as exc_info:
            call_with_retry(op, RetryPolicy(), sleep=sleeper)
        assert exc_info.value is error
        assert op.calls == 1
        assert sleeper.delays == []

    @pytest.mark.parametrize("failures", [1, 2, 3])
    def test_recovers_within_budget(self, sleeper, failures):
        op = Flaky(failures, RateLimitError())
        assert call_with_retry(op, RetryPolicy(), sleep=sleeper) == "ok"
        assert op.calls == failures + 1
        assert sleeper.delays == [2.0, 4.0, 8.0][:failures]
        assert all(b == a * 2 for a, b in zip(sleeper.delays, sleeper.delays[1:]))

    def test_gives_up_after_budget(self, sleeper):
        error = RateLimitError("still limited")
        op = Flaky(100, error)
        with pytest.raises(RateLimitError) as exc_info:
            call_with_retry(op, RetryPolicy(retries=3), sleep=sleeper)
        assert exc_info.value is error
        assert op.calls == 4
        assert sleeper.delays == [2.0, 4.0, 8.0]

    def test_custom_policy(self, sleeper):
        op = Flaky(100, RateLimitError())
        policy = RetryPolicy(retries=2, initial_delay=0.5, backoff_factor=3.0)
        with pytest.raises(RateLimitError):
            call_with_retry(op, policy, sleep=sleeper)
        assert op.calls == 3
        assert sleeper.delays == [0.5, 1.5]

    def test_zero_budget(self, sleeper):
        op = Flaky(1, RateLimitError())
        with pytest.raises(RateLimitError):
            call_with_retry(op, RetryPolicy(retries=0), sleep=sleeper)
        assert op.calls == 1
