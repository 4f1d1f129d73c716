"""HTTP record source with retry logic."""

import logging
from typing import Any

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..config import settings
from ..exceptions import SourceUnavailable

logger = logging.getLogger(__name__)


def _should_retry(exception: BaseException) -> bool:
    """Retry transport failures and server errors, never client errors."""
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code >= 500
    return isinstance(exception, httpx.TransportError)


class HttpRecordSource:
    """Fetches the trending JSON array with a single GET request."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        attempts: int | None = None,
        backoff: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.url = url or settings.source_url
        self.attempts = attempts if attempts is not None else settings.fetch_attempts
        self.backoff = backoff if backoff is not None else settings.fetch_backoff
        # Apps Script endpoints answer with a redirect to the actual content
        self.client = client or httpx.Client(
            timeout=timeout or settings.request_timeout,
            follow_redirects=True,
        )

    def fetch(self) -> list[Any]:
        """Return the decoded JSON array.

        Raises:
            SourceUnavailable: On network failure, non-2xx status, invalid JSON,
                or a top-level value that is not an array.
        """
        try:
            response = self._get()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(
                f"Source returned HTTP {e.response.status_code} for {self.url}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailable(f"Request to {self.url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable(f"Source returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise SourceUnavailable(
                f"Expected a JSON array, got {type(data).__name__}"
            )
        return data

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HttpRecordSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self) -> httpx.Response:
        retrying = Retrying(
            stop=stop_after_attempt(max(1, self.attempts)),
            wait=wait_exponential(multiplier=self.backoff, max=30),
            retry=retry_if_exception(_should_retry),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                response = self.client.get(self.url)
                response.raise_for_status()
        return response
