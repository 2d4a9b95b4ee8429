"""Agent Trust SDK - Python SDK for the Open Agent Trust protocol."""

from agenttrust.async_client import AsyncAgentTrustClient
from agenttrust.client import AgentTrustClient
from agenttrust.exceptions import (
    AgentTrustError,
    AuthenticationError,
    ConfigurationError,
    ContractRevertError,
    RateLimitedError,
    RPCError,
    ServerError,
    SignerRequiredError,
    TransactionFailedError,
    TransactionTimeoutError,
    ValidationError,
)
from agenttrust.logging import configure_logging, get_logger
from agenttrust.reputation import classify_risk, compute_weighted_reputation
from agenttrust.transport import RetryConfig, RPCTransport
from agenttrust.types import (
    Attestation,
    CategoryKey,
    ContractAddresses,
    Interaction,
    RegisteredInteraction,
    RegisteredSchema,
    Schema,
    TransactionReceipt,
    TrustEdge,
    WeightedReputation,
    WeightedReputationQuery,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "AgentTrustClient",
    "AsyncAgentTrustClient",
    "ContractAddresses",
    # Reputation
    "compute_weighted_reputation",
    "classify_risk",
    # Types
    "Attestation",
    "CategoryKey",
    "Interaction",
    "RegisteredInteraction",
    "RegisteredSchema",
    "Schema",
    "TransactionReceipt",
    "TrustEdge",
    "WeightedReputation",
    "WeightedReputationQuery",
    # Exceptions
    "AgentTrustError",
    "AuthenticationError",
    "ConfigurationError",
    "ContractRevertError",
    "RateLimitedError",
    "RPCError",
    "ServerError",
    "SignerRequiredError",
    "TransactionFailedError",
    "TransactionTimeoutError",
    "ValidationError",
    # Transport
    "RPCTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
