import logging

import pytest
import requests

from conftest import DummyResponse, FakeHttp
from docuquery.client.retry import RetryExhaustedError, RetryPolicy, fetch_with_retry

URL = "http://proxy.test/api/generate"


def run(http, max_retries=5):
    sleeps = []
    resp = fetch_with_retry("POST", URL, max_retries=max_retries, session=http, sleep=sleeps.append, json={"a": 1})
    return resp, sleeps


@pytest.mark.parametrize("status", [200, 201, 204, 400, 401, 404, 428, 430, 499])
def test_non_retryable_status_returns_first_response(status):
    http = FakeHttp(DummyResponse(status, text="x"))
    resp, sleeps = run(http)
    assert resp.status_code == status
    assert len(http.calls) == 1
    assert sleeps == []


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_retryable_status_is_retried(status):
    http = FakeHttp(DummyResponse(status, text="busy"), DummyResponse(200, {"text": "ok"}))
    resp, sleeps = run(http)
    assert resp.status_code == 200
    assert len(http.calls) == 2
    assert sleeps == [1]


def test_delays_double_per_attempt():
    http = FakeHttp(
        DummyResponse(500, text=""),
        DummyResponse(502, text=""),
        DummyResponse(503, text=""),
        DummyResponse(200, {"text": "ok"}),
    )
    resp, sleeps = run(http)
    assert resp.status_code == 200
    assert sleeps == [1, 2, 4]


def test_all_retryable_exhausts_after_max_attempts():
    http = FakeHttp(*[DummyResponse(503, text="") for _ in range(3)])
    sleeps = []
    with pytest.raises(RetryExhaustedError, match="API request failed after multiple retries."):
        fetch_with_retry("POST", URL, max_retries=3, session=http, sleep=sleeps.append)
    assert len(http.calls) == 3
    assert sleeps == [1, 2, 4]


def test_network_error_reraised_on_last_attempt():
    boom = requests.ConnectionError("connection refused")
    http = FakeHttp(boom, boom, boom)
    sleeps = []
    with pytest.raises(requests.ConnectionError):
        fetch_with_retry("POST", URL, max_retries=3, session=http, sleep=sleeps.append)
    assert len(http.calls) == 3
    assert sleeps == [1, 2]


def test_network_error_then_success():
    http = FakeHttp(requests.Timeout("slow"), DummyResponse(200, {"text": "ok"}))
    resp, sleeps = run(http)
    assert resp.status_code == 200
    assert sleeps == [1]


def test_request_kwargs_are_forwarded():
    http = FakeHttp(DummyResponse(200, {}))
    run(http)
    assert http.calls[0]["method"] == "POST"
    assert http.calls[0]["url"] == URL
    assert http.calls[0]["json"] == {"a": 1}


def test_single_attempt_policy():
    http = FakeHttp(DummyResponse(500, text=""))
    with pytest.raises(RetryExhaustedError):
        fetch_with_retry("GET", URL, max_retries=1, session=http, sleep=lambda s: None)
    assert len(http.calls) == 1


def test_invalid_max_retries():
    with pytest.raises(ValueError):
        fetch_with_retry("GET", URL, max_retries=0, session=FakeHttp(), sleep=lambda s: None)


def test_policy_helpers():
    policy = RetryPolicy(max_attempts=4)
    assert [policy.delay(i) for i in range(4)] == [1, 2, 4, 8]
    assert policy.is_retryable(429)
    assert policy.is_retryable(500)
    assert not policy.is_retryable(499)
    assert not policy.is_retryable(200)


def test_retry_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="docuquery.retry")
    http = FakeHttp(DummyResponse(429, text=""), DummyResponse(200, {}))
    run(http)
    assert "status 429" in caplog.text
    assert "Retrying in 1s" in caplog.text
