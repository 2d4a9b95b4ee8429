"""
Async JSON-RPC Transport for Agent Trust SDK.

Handles async HTTP communication with an Ethereum JSON-RPC node using the
httpx async client, with automatic retry logic and error handling.
"""

import asyncio
import itertools
import random
import time
from collections.abc import Callable, Coroutine
from typing import Any

import httpx

from agenttrust.exceptions import AgentTrustError, ServerError
from agenttrust.logging import log_rpc_request, log_rpc_response
from agenttrust.transport import (
    RPC_LIMIT_EXCEEDED,
    RetryConfig,
    build_payload,
    parse_http_error,
    parse_rpc_body,
    parse_rpc_error,
)


class AsyncRPCTransport:
    """
    Async JSON-RPC transport layer with retry logic.

    Handles:
    - JSON-RPC 2.0 envelopes with incrementing request ids
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error parsing (HTTP and JSON-RPC) into typed exceptions
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize async JSON-RPC transport.

        Args:
            rpc_url: JSON-RPC endpoint (e.g., "https://sepolia.base.org")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._ids = itertools.count(1)

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncRPCTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        """
        Make a JSON-RPC call with automatic retry.

        Args:
            method: JSON-RPC method (e.g., "eth_call")
            params: Positional params

        Returns:
            The ``result`` member of the response

        Raises:
            AgentTrustError: On HTTP or JSON-RPC errors
        """
        params = params or []

        async def make_request() -> tuple[int, httpx.Response, float]:
            request_id = next(self._ids)
            log_rpc_request(self.rpc_url, method, params, request_id)
            started = time.monotonic()
            response = await self._client.post(
                self.rpc_url, json=build_payload(request_id, method, params)
            )
            return request_id, response, (time.monotonic() - started) * 1000

        return await self._execute_with_retry(method, make_request)

    async def _execute_with_retry(
        self,
        method: str,
        request_fn: Callable[[], Coroutine[Any, Any, tuple[int, httpx.Response, float]]],
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            method: JSON-RPC method, for logging
            request_fn: Async function that makes the HTTP request

        Returns:
            JSON-RPC result

        Raises:
            AgentTrustError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                request_id, response, elapsed_ms = await request_fn()

                if response.status_code >= 400:
                    log_rpc_response(
                        self.rpc_url, method, response.status_code, request_id, elapsed_ms
                    )
                    error = parse_http_error(response)

                    if not self._should_retry(response.status_code, attempt):
                        raise error

                    last_error = error
                    retry_after = response.headers.get("Retry-After")
                    await asyncio.sleep(self._get_backoff_time(attempt, retry_after))
                    continue

                body = parse_rpc_body(response)

                rpc_error = body.get("error")
                log_rpc_response(
                    self.rpc_url, method, response.status_code, request_id, elapsed_ms, rpc_error
                )

                if rpc_error is None:
                    return body.get("result")

                error = parse_rpc_error(rpc_error)
                if not self._should_retry_rpc(rpc_error, attempt):
                    raise error

                last_error = error
                await asyncio.sleep(self._get_backoff_time(attempt, None))

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                await asyncio.sleep(self._get_backoff_time(attempt, None))

        if last_error:
            if isinstance(last_error, AgentTrustError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """Determine if a request should be retried after an HTTP error."""
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _should_retry_rpc(self, error: dict[str, Any], attempt: int) -> bool:
        if attempt >= self.retry_config.max_retries:
            return False

        return error.get("code") == RPC_LIMIT_EXCEEDED

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """Exponential backoff with jitter, honoring Retry-After."""
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)
