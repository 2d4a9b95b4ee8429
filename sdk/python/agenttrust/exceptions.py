"""Agent Trust SDK exception classes."""


class AgentTrustError(Exception):
    """Base exception for all Agent Trust SDK errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(AgentTrustError):
    """Raised when SDK configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class SignerRequiredError(AgentTrustError):
    """Raised when a write operation is attempted on a read-only client."""

    def __init__(self, message: str = "Signer required for write operations") -> None:
        super().__init__("SIGNER_REQUIRED", message)


class ValidationError(AgentTrustError):
    """Raised when call arguments cannot be encoded for the contract."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class AuthenticationError(AgentTrustError):
    """Raised when the RPC endpoint rejects our credentials."""

    pass


class RateLimitedError(AgentTrustError):
    """Raised when the RPC endpoint rate limits us."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(AgentTrustError):
    """Raised on RPC endpoint failures (5xx, connection errors)."""

    pass


class RPCError(AgentTrustError):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(
        self,
        rpc_code: int,
        message: str,
        request_id: str | None = None,
        code: str = "RPC_ERROR",
    ) -> None:
        super().__init__(code, message, request_id)
        self.rpc_code = rpc_code


class ContractRevertError(RPCError):
    """Raised when a contract call or transaction reverts."""

    def __init__(
        self,
        rpc_code: int,
        message: str,
        revert_data: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(rpc_code, message, request_id, code="CONTRACT_REVERT")
        self.revert_data = revert_data


class TransactionFailedError(AgentTrustError):
    """Raised when a mined transaction has a failed status."""

    def __init__(self, tx_hash: str, message: str | None = None) -> None:
        super().__init__(
            "TRANSACTION_FAILED",
            message or f"Transaction {tx_hash} failed",
        )
        self.tx_hash = tx_hash


class TransactionTimeoutError(AgentTrustError):
    """Raised when no receipt shows up before the receipt timeout."""

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(
            "TRANSACTION_TIMEOUT",
            f"No receipt for {tx_hash} after {timeout:.1f}s",
        )
        self.tx_hash = tx_hash
        self.timeout = timeout
