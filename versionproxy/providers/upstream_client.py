"""Thin JSON-over-HTTP client shared by every version source.

Wraps an injected ``httpx.AsyncClient`` with the two things every adapter
needs:

* **status/transport mapping** -- transport failures and non-2xx answers
  become :class:`UpstreamFetchError`; undecodable or mis-shaped JSON becomes
  :class:`UpstreamSchemaError`.
* **an optional retry policy** -- only the Docker Hub source retries.  It
  retries GETs on a fixed set of transient statuses with exponential
  backoff.  Transport errors and timeouts are not retried.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from versionproxy.utils.errors import UpstreamFetchError, UpstreamSchemaError
from versionproxy.utils.logging import get_logger

_M = TypeVar("_M", bound=BaseModel)

DEFAULT_USER_AGENT = "versionproxy/0.1.0"

RETRYABLE_STATUS_CODES = frozenset({408, 413, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try a request and which answers justify a retry.

    ``attempts`` counts the first try, so ``attempts=3`` means at most two
    retries.  The delay before retry *n* is ``backoff_base * 2 ** (n - 1)``.
    """

    attempts: int = 1
    status_codes: frozenset[int] = field(default_factory=frozenset)
    methods: frozenset[str] = frozenset({"GET"})
    backoff_base: float = 0.3

    def should_retry(self, method: str, status_code: int, attempt: int) -> bool:
        return (
            attempt < self.attempts
            and method.upper() in self.methods
            and status_code in self.status_codes
        )

    def delay_for(self, attempt: int) -> float:
        return self.backoff_base * (2 ** (attempt - 1))


NO_RETRY = RetryPolicy()
REGISTRY_RETRY = RetryPolicy(attempts=3, status_codes=RETRYABLE_STATUS_CODES)


class UpstreamClient:
    """Fetch and validate JSON documents from one upstream service."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        provider_name: str,
        *,
        retry: RetryPolicy = NO_RETRY,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._http = http_client
        self._provider_name = provider_name
        self._retry = retry
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._timeout = timeout
        self._sleep = sleep
        self._logger = get_logger(__name__)

    @property
    def provider_name(self) -> str:
        return self._provider_name

    async def get_json(self, url: str, schema: type[_M]) -> _M:
        """GET *url* and validate the body against *schema*.

        Raises:
            UpstreamFetchError: transport failure or non-2xx after retries.
            UpstreamSchemaError: body is not JSON or does not match *schema*.
        """
        response = await self._get_with_retry(url)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamSchemaError(
                f"Response from {url} is not valid JSON: {exc}",
                provider_name=self._provider_name,
            ) from exc

        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            raise UpstreamSchemaError(
                f"Response from {url} does not match {schema.__name__}: "
                f"{exc.error_count()} validation error(s)",
                provider_name=self._provider_name,
            ) from exc

    def _request_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"headers": self._headers, "follow_redirects": True}
        if self._timeout is not None:
            options["timeout"] = self._timeout
        return options

    async def _get_with_retry(self, url: str) -> httpx.Response:
        attempt = 1
        while True:
            try:
                response = await self._http.get(url, **self._request_options())
            except httpx.HTTPError as exc:
                raise UpstreamFetchError(
                    f"Request to {url} failed: {type(exc).__name__}: {exc}",
                    provider_name=self._provider_name,
                ) from exc

            status = response.status_code
            if status < 400:
                return response

            if self._retry.should_retry("GET", status, attempt):
                delay = self._retry.delay_for(attempt)
                self._logger.warning(
                    "upstream_retry",
                    provider=self._provider_name,
                    url=url,
                    status=status,
                    attempt=attempt,
                    delay_s=delay,
                )
                await self._sleep(delay)
                attempt += 1
                continue

            raise UpstreamFetchError(
                f"HTTP {status} for {url}",
                provider_name=self._provider_name,
                status_code=status,
            )
