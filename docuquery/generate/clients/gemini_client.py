# Client for the Gemini generateContent REST endpoint.
# One attempt per call; retrying is left to whoever calls the proxy.

import requests
from typing import Optional

from ..types import UpstreamPayload, UpstreamResult


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    def generate(self, model: str, payload: UpstreamPayload) -> UpstreamResult:
        resp = requests.post(
            self.endpoint(model),
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=payload.to_dict(),
            timeout=self.timeout,
        )
        return UpstreamResult(
            status_code=resp.status_code,
            body=resp.text,
            content_type=resp.headers.get("Content-Type"),
        )
