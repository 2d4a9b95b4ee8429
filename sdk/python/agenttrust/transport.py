"""
JSON-RPC Transport for Agent Trust SDK.

Handles HTTP communication with an Ethereum JSON-RPC node, with automatic
retry logic and error handling.
"""

import itertools
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from agenttrust.exceptions import (
    AgentTrustError,
    AuthenticationError,
    ContractRevertError,
    RateLimitedError,
    RPCError,
    ServerError,
)
from agenttrust.logging import log_rpc_request, log_rpc_response

# JSON-RPC error codes with special handling
RPC_EXECUTION_REVERTED = 3
RPC_LIMIT_EXCEEDED = -32005


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


def build_payload(request_id: int, method: str, params: list[Any]) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 request envelope."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": method,
        "params": params,
    }


def parse_rpc_error(error: dict[str, Any]) -> AgentTrustError:
    """
    Convert a JSON-RPC error object into a typed exception.

    Args:
        error: The ``error`` member of a JSON-RPC response

    Returns:
        ContractRevertError for reverts, RateLimitedError for -32005,
        RPCError otherwise
    """
    code = error.get("code", 0)
    message = str(error.get("message") or "Unknown RPC error")
    data = error.get("data")

    if code == RPC_EXECUTION_REVERTED or "execution reverted" in message.lower():
        revert_data = data if isinstance(data, str) else None
        return ContractRevertError(code, message, revert_data)
    if code == RPC_LIMIT_EXCEEDED:
        return RateLimitedError("RATE_LIMITED", message, retry_after=1)
    return RPCError(code, message)


def parse_rpc_body(response: httpx.Response) -> dict[str, Any]:
    """
    Decode a JSON-RPC response body.

    Raises:
        ServerError: If the body is not JSON or not a single JSON-RPC object
    """
    try:
        body = response.json()
    except ValueError as e:
        raise ServerError("INVALID_RESPONSE", "RPC endpoint returned non-JSON body") from e
    if not isinstance(body, dict):
        raise ServerError(
            "INVALID_RESPONSE",
            f"RPC endpoint returned {type(body).__name__} instead of a JSON-RPC object",
        )
    return body


def parse_http_error(response: httpx.Response) -> AgentTrustError:
    """
    Parse an HTTP error response from the RPC endpoint.

    Args:
        response: HTTP response with error status

    Returns:
        Appropriate AgentTrustError subclass
    """
    status_code = response.status_code
    message = f"HTTP {status_code} from RPC endpoint"

    if status_code in (401, 403):
        return AuthenticationError("UNAUTHORIZED", message)
    elif status_code == 429:
        retry_after_str = response.headers.get("Retry-After", "60")
        try:
            retry_after = int(retry_after_str)
        except ValueError:
            retry_after = 60
        return RateLimitedError("RATE_LIMITED", message, retry_after)
    elif status_code >= 500:
        return ServerError("SERVER_ERROR", message)
    else:
        return RPCError(status_code, message, code="HTTP_ERROR")


class RPCTransport:
    """
    JSON-RPC transport layer with retry logic.

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
        Initialize JSON-RPC transport.

        Args:
            rpc_url: JSON-RPC endpoint (e.g., "https://sepolia.base.org")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._ids = itertools.count(1)

        self._client = httpx.Client(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "RPCTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(self, method: str, params: list[Any] | None = None) -> Any:
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

        def make_request() -> tuple[int, httpx.Response, float]:
            request_id = next(self._ids)
            log_rpc_request(self.rpc_url, method, params, request_id)
            started = time.monotonic()
            response = self._client.post(
                self.rpc_url, json=build_payload(request_id, method, params)
            )
            return request_id, response, (time.monotonic() - started) * 1000

        return self._execute_with_retry(method, make_request)

    def _execute_with_retry(
        self,
        method: str,
        request_fn: Callable[[], tuple[int, httpx.Response, float]],
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            method: JSON-RPC method, for logging
            request_fn: Function that makes the HTTP request

        Returns:
            JSON-RPC result

        Raises:
            AgentTrustError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                request_id, response, elapsed_ms = request_fn()

                if response.status_code >= 400:
                    log_rpc_response(
                        self.rpc_url, method, response.status_code, request_id, elapsed_ms
                    )
                    error = parse_http_error(response)

                    if not self._should_retry(response.status_code, attempt):
                        raise error

                    last_error = error
                    retry_after = response.headers.get("Retry-After")
                    time.sleep(self._get_backoff_time(attempt, retry_after))
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
                time.sleep(self._get_backoff_time(attempt, None))

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                time.sleep(self._get_backoff_time(attempt, None))

        if last_error:
            if isinstance(last_error, AgentTrustError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried after an HTTP error.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _should_retry_rpc(self, error: dict[str, Any], attempt: int) -> bool:
        """Only the node's "limit exceeded" JSON-RPC error is retried."""
        if attempt >= self.retry_config.max_retries:
            return False

        return error.get("code") == RPC_LIMIT_EXCEEDED

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        # Apply jitter (±jitter%)
        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)
