"""Tests for the attempt() retry combinator."""

import asyncio

import pytest

from pcpp_scrape.fetcher import FetchError
from pcpp_scrape.retry import attempt, is_retryable_status


class Flaky:
    """Fails with the given errors in order, then returns "ok"."""

    def __init__(self, errors):
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


def _retry_422(e):
    return is_retryable_status(e, {422})


class TestAttempt:
    def test_success_first_try(self, recording_sleep):
        fn = Flaky([])
        result = asyncio.run(attempt(fn, 3, _retry_422, 3.0, sleep=recording_sleep))
        assert result == "ok"
        assert fn.calls == 1
        assert recording_sleep.delays == []

    def test_recovers_after_retryable_errors(self, recording_sleep):
        fn = Flaky([FetchError("x", status_code=422), FetchError("x", status_code=422)])
        result = asyncio.run(attempt(fn, 3, _retry_422, 3.0, sleep=recording_sleep))
        assert result == "ok"
        assert fn.calls == 3
        assert recording_sleep.delays == [3.0, 3.0]

    def test_gives_up_after_max_attempts(self, recording_sleep):
        fn = Flaky([FetchError("x", status_code=422)] * 5)
        with pytest.raises(FetchError):
            asyncio.run(attempt(fn, 3, _retry_422, 3.0, sleep=recording_sleep))
        assert fn.calls == 3
        assert len(recording_sleep.delays) == 2

    def test_non_retryable_raises_immediately(self, recording_sleep):
        fn = Flaky([FetchError("x", status_code=500)])
        with pytest.raises(FetchError):
            asyncio.run(attempt(fn, 3, _retry_422, 3.0, sleep=recording_sleep))
        assert fn.calls == 1
        assert recording_sleep.delays == []

    def test_on_retry_reports_attempts_left(self, recording_sleep):
        seen = []
        fn = Flaky([FetchError("x", status_code=422)] * 2)
        asyncio.run(attempt(
            fn, 3, _retry_422, 1.0,
            sleep=recording_sleep,
            on_retry=lambda e, left: seen.append(left),
        ))
        assert seen == [2, 1]

    def test_exceptions_filter(self, recording_sleep):
        fn = Flaky([KeyError("boom")])
        with pytest.raises(KeyError):
            asyncio.run(attempt(
                fn, 3, lambda e: True, 1.0,
                sleep=recording_sleep,
                exceptions=(FetchError,),
            ))
        assert fn.calls == 1

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError):
            asyncio.run(attempt(Flaky([]), 0, _retry_422, 1.0))


class TestIsRetryableStatus:
    def test_matching_status(self):
        assert is_retryable_status(FetchError("x", status_code=422), {422})

    def test_other_status(self):
        assert not is_retryable_status(FetchError("x", status_code=500), {422})

    def test_no_status(self):
        assert not is_retryable_status(ValueError("x"), {422})
