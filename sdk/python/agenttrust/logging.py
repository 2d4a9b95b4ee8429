"""
Agent Trust SDK logging utilities.

Provides configurable logging for JSON-RPC traffic and transactions.
Ensures no sensitive data (private keys, RPC provider API keys) is logged.
"""

import logging
import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

# Create SDK-specific loggers
_sdk_logger = logging.getLogger("agenttrust")
_rpc_logger = logging.getLogger("agenttrust.rpc")
_tx_logger = logging.getLogger("agenttrust.tx")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Private key patterns (PEM format)
    (re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL), "[PRIVATE_KEY_REDACTED]"),
    # Raw secp256k1 private keys (32 bytes hex, optional 0x)
    (re.compile(r"private_?key['\"]?\s*[:=]\s*['\"]?(0x)?[a-fA-F0-9]{64}['\"]?", re.IGNORECASE), "private_key: [REDACTED]"),
    # Provider API keys embedded in RPC URLs
    (re.compile(r"(/v[23]/)[A-Za-z0-9_\-]{16,}"), r"\1[REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

# Path segments after which providers put API keys (Alchemy /v2/, Infura /v3/)
_KEYED_PATH_SEGMENTS = {"v2", "v3"}


def configure_logging(
    level: int = logging.INFO,
    rpc_level: int | None = None,
    tx_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure Agent Trust SDK logging.

    Args:
        level: Default log level for all SDK loggers (default: INFO)
        rpc_level: Log level for JSON-RPC request/response logging (default: same as level)
        tx_level: Log level for transaction logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from agenttrust.logging import configure_logging

        # Trace every eth_call / eth_sendTransaction
        configure_logging(level=logging.INFO, rpc_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _rpc_logger.setLevel(rpc_level if rpc_level is not None else level)
    _tx_logger.setLevel(tx_level if tx_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an Agent Trust SDK logger.

    Args:
        name: Logger name suffix (e.g., "rpc", "tx"). If None, returns main SDK logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"agenttrust.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces private keys, provider API keys and other secrets with
    redacted placeholders.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def redact_rpc_url(url: str) -> str:
    """
    Strip credentials from an RPC URL for logging.

    Drops userinfo and the query string, and replaces the path segment that
    follows ``/v2/`` or ``/v3/`` (where hosted providers put API keys).

    Example:
        ``https://eth-mainnet.g.alchemy.com/v2/abc123`` becomes
        ``https://eth-mainnet.g.alchemy.com/v2/[REDACTED]``
    """
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"

    segments = parts.path.split("/")
    for i, segment in enumerate(segments[:-1]):
        if segment in _KEYED_PATH_SEGMENTS and segments[i + 1]:
            segments[i + 1] = "[REDACTED]"

    query = "[REDACTED]" if parts.query else ""
    return urlunsplit((parts.scheme, host, "/".join(segments), query, ""))


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: private_key, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = {"private_key", "privatekey", "secret", "token", "password", "api_key"}

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_rpc_request(
    url: str,
    method: str,
    params: list[Any] | None = None,
    request_id: int | None = None,
) -> None:
    """
    Log a JSON-RPC request at DEBUG level with sensitive data masked.

    Args:
        url: RPC endpoint URL (redacted before logging)
        method: JSON-RPC method (eth_call, eth_sendTransaction, ...)
        params: JSON-RPC params (optional)
        request_id: JSON-RPC request id (optional)
    """
    if not _rpc_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} -> {redact_rpc_url(url)}"]

    if request_id is not None:
        log_parts.append(f"id={request_id}")

    if params:
        safe_params = [
            safe_log_dict(p) if isinstance(p, dict) else p for p in params
        ]
        log_parts.append(f"params={safe_params}")

    _rpc_logger.debug(" | ".join(log_parts))


def log_rpc_response(
    url: str,
    method: str,
    status_code: int,
    request_id: int | None = None,
    elapsed_ms: float | None = None,
    error: dict[str, Any] | None = None,
) -> None:
    """
    Log a JSON-RPC response at DEBUG level.

    Args:
        url: RPC endpoint URL (redacted before logging)
        method: JSON-RPC method
        status_code: HTTP status code
        request_id: JSON-RPC request id (optional)
        elapsed_ms: Request duration in milliseconds (optional)
        error: JSON-RPC error object, if the node returned one (optional)
    """
    if not _rpc_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} <- {redact_rpc_url(url)} HTTP {status_code}"]

    if request_id is not None:
        log_parts.append(f"id={request_id}")

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if error:
        log_parts.append(f"error={safe_log_dict(error)}")

    _rpc_logger.debug(" | ".join(log_parts))


def log_transaction(
    operation: str,
    contract: str,
    function: str,
    tx_hash: str | None = None,
) -> None:
    """
    Log a transaction lifecycle event at DEBUG level.

    Args:
        operation: Lifecycle step (e.g., "send", "mined", "failed")
        contract: Contract address
        function: Contract function name
        tx_hash: Transaction hash (optional)
    """
    if not _tx_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{operation}: contract={contract}, function={function}"]

    if tx_hash:
        log_parts.append(f"tx={tx_hash}")

    _tx_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "redact_rpc_url",
    "safe_log_dict",
    "log_rpc_request",
    "log_rpc_response",
    "log_transaction",
]
