# Generic HTTP call wrapper with exponential backoff.
#
# 429 and 5xx replies, as well as transport errors, are retried after
# backoff_base * 2**attempt seconds. Any other response goes straight back
# to the caller.

from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from docuquery.log import get_logger

logger = get_logger("docuquery.retry")


class RetryExhaustedError(RuntimeError):
    """Every attempt got a retryable status."""


@dataclass
class RetryPolicy:
    max_attempts: int = 5
    backoff_base: float = 1.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @staticmethod
    def is_retryable(status: int) -> bool:
        return status == 429 or status >= 500

    def delay(self, attempt: int) -> float:
        return self.backoff_base * (2 ** attempt)


def fetch_with_retry(
    method: str,
    url: str,
    max_retries: int = 5,
    session: Optional[requests.Session] = None,
    sleep: Optional[Callable[[float], Any]] = None,
    policy: Optional[RetryPolicy] = None,
    **request_kwargs: Any,
) -> requests.Response:
    policy = policy or RetryPolicy(max_attempts=max_retries)
    http = session or requests
    sleep = sleep or time.sleep

    for attempt in range(policy.max_attempts):
        delay = policy.delay(attempt)
        try:
            response = http.request(method, url, **request_kwargs)
        except requests.RequestException as e:
            if attempt == policy.max_attempts - 1:
                raise
            logger.info("[Retry] Request failed with error: %s. Retrying in %gs...", e, delay)
            sleep(delay)
            continue

        if not policy.is_retryable(response.status_code):
            return response

        logger.info("[Retry] Request failed with status %s. Retrying in %gs...", response.status_code, delay)
        sleep(delay)

    raise RetryExhaustedError("API request failed after multiple retries.")
