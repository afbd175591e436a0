from __future__ import annotations

import json as jsonlib
from typing import Any, Dict, List, Optional

import pytest
import requests

from docuquery.generate.clients import gemini_client


class DummyResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, payload: Any = None, text: Optional[str] = None, content_type: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = jsonlib.dumps(payload) if payload is not None else ""
        self.text = text
        if content_type is None:
            content_type = "application/json" if payload is not None else "text/plain"
        self.headers = {"Content-Type": content_type}

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHttp:
    """Scripted requests.Session: each call pops the next response or raises it."""

    def __init__(self, *script: Any):
        self.script: List[Any] = list(script)
        self.calls: List[Dict[str, Any]] = []
        self.on_call = None

    def _next(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.on_call:
            self.on_call()
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        return self._next(method, url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> DummyResponse:
        return self._next("POST", url, **kwargs)


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    # empty beats any value a local .env might carry
    monkeypatch.setenv("GEMINI_API_KEY", "")


@pytest.fixture
def fake_upstream(monkeypatch: pytest.MonkeyPatch):
    """Install a fake requests.post for the Gemini client; returns the capture dict."""
    captured: Dict[str, Any] = {"calls": 0}

    def install(response: Any) -> Dict[str, Any]:
        def fake_post(url: str, params=None, headers=None, json=None, timeout=None):
            captured["calls"] += 1
            captured["url"] = url
            captured["params"] = params
            captured["headers"] = headers
            captured["payload"] = json
            captured["timeout"] = timeout
            if isinstance(response, BaseException):
                raise response
            return response

        monkeypatch.setattr(gemini_client.requests, "post", fake_post)
        return captured

    return install


@pytest.fixture
def gemini_answer():
    def build(text: str) -> Dict[str, Any]:
        return {"candidates": [{"content": {"parts": [{"text": text}]}}]}

    return build


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
