"""
Agent Trust SDK main client.

Provides the primary interface for interacting with the Open Agent Trust
protocol contracts.
"""

import os
from typing import Any

from eth_utils import is_address, to_checksum_address

from agenttrust.abi import (
    INTERACTION_REGISTRY_ABI,
    SCHEMA_REGISTRY_ABI,
    TRUST_GRAPH_ABI,
)
from agenttrust.clients import InteractionsClient, SchemasClient, TrustClient
from agenttrust.contract import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    Contract,
)
from agenttrust.exceptions import ConfigurationError, SignerRequiredError
from agenttrust.hashing import agent_id_from_address
from agenttrust.transport import RetryConfig, RPCTransport
from agenttrust.types.config import ContractAddresses
from agenttrust.types.trust import WeightedReputation, WeightedReputationQuery


def read_env_config() -> dict[str, Any]:
    """
    Read client settings from environment variables.

    Environment variables:
        AGENTTRUST_RPC_URL: JSON-RPC endpoint (required)
        AGENTTRUST_INTERACTION_REGISTRY: InteractionRegistry address (required)
        AGENTTRUST_SCHEMA_REGISTRY: AttestationSchemaRegistry address (required)
        AGENTTRUST_TRUST_GRAPH: TrustGraph address (required)
        AGENTTRUST_SENDER: Account used for transactions (optional)

    Returns:
        Keyword arguments for AgentTrustClient / AsyncAgentTrustClient

    Raises:
        ConfigurationError: If a required variable is missing or invalid
    """
    required = {
        "rpc_url": "AGENTTRUST_RPC_URL",
        "interaction_registry": "AGENTTRUST_INTERACTION_REGISTRY",
        "attestation_schema_registry": "AGENTTRUST_SCHEMA_REGISTRY",
        "trust_graph": "AGENTTRUST_TRUST_GRAPH",
    }
    values: dict[str, str] = {}
    for key, env_var in required.items():
        value = os.environ.get(env_var)
        if not value:
            raise ConfigurationError(f"{env_var} environment variable not set")
        values[key] = value

    return {
        "rpc_url": values.pop("rpc_url"),
        "addresses": ContractAddresses(**values),
        "sender": os.environ.get("AGENTTRUST_SENDER") or None,
    }


def validate_sender(sender: str | None) -> str | None:
    """Checksum the sender address, rejecting malformed values."""
    if sender is None:
        return None
    if not is_address(sender):
        raise ConfigurationError(f"Invalid sender address: {sender!r}")
    return to_checksum_address(sender)


class AgentTrustClient:
    """
    Main client for the Open Agent Trust protocol.

    Aggregates the interaction registry, schema registry and trust graph
    clients over one JSON-RPC connection.

    Example:
        ```python
        from agenttrust import AgentTrustClient, ContractAddresses

        client = AgentTrustClient(
            rpc_url="https://sepolia.base.org",
            addresses=ContractAddresses(
                interaction_registry="0x...",
                attestation_schema_registry="0x...",
                trust_graph="0x...",
            ),
            sender="0x...",  # unlocked account on the node / wallet
        )

        registered = client.interactions.register(
            agent_b=other_agent_id,
            interaction_hash="ipfs://bafy...",
            interaction_type="service_delivery",
        )
        client.trust.submit_attestation(
            to_agent=other_agent_id,
            namespace="compute-market.v1",
            tag="service.quality",
            score=95,
            interaction_id=registered.interaction_id,
        )

        report = client.get_weighted_reputation(other_agent_id)
        ```

    Without a ``sender`` the client is read-only; write methods raise
    SignerRequiredError.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        rpc_url: str,
        addresses: ContractAddresses,
        sender: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """
        Initialize the Agent Trust client.

        Args:
            rpc_url: JSON-RPC endpoint
            addresses: Deployed contract addresses
            sender: Account used for transactions (optional, read-only without)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            receipt_timeout: Seconds to wait for a transaction to be mined
            poll_interval: Seconds between receipt polls
        """
        if not rpc_url:
            raise ConfigurationError("rpc_url is required")

        self.rpc_url = rpc_url
        self.addresses = addresses
        self.sender = validate_sender(sender)
        self.timeout = timeout

        self._transport = RPCTransport(
            rpc_url=rpc_url,
            timeout=timeout,
            retry_config=retry_config,
        )

        def bind(address: str, abi: Any) -> Contract:
            return Contract(
                address,
                abi,
                self._transport,
                sender=self.sender,
                receipt_timeout=receipt_timeout,
                poll_interval=poll_interval,
            )

        self.interactions = InteractionsClient(
            bind(addresses.interaction_registry, INTERACTION_REGISTRY_ABI)
        )
        self.schemas = SchemasClient(
            bind(addresses.attestation_schema_registry, SCHEMA_REGISTRY_ABI)
        )
        self.trust = TrustClient(bind(addresses.trust_graph, TRUST_GRAPH_ABI))

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AgentTrustClient":
        """
        Create a client from environment variables (see read_env_config()).

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls(timeout=timeout, retry_config=retry_config, **read_env_config())

    @property
    def transport(self) -> RPCTransport:
        """Get the underlying JSON-RPC transport (for advanced use cases)."""
        return self._transport

    @property
    def read_only(self) -> bool:
        return self.sender is None

    def get_address(self) -> str:
        """Get the sender account's checksummed address."""
        if not self.sender:
            raise SignerRequiredError("Signer required")
        return self.sender

    def get_agent_id(self) -> int:
        """Get the agent id of the sender account (its address as uint256)."""
        return agent_id_from_address(self.get_address())

    def get_weighted_reputation(
        self,
        agent_id: int,
        query: WeightedReputationQuery | None = None,
    ) -> WeightedReputation:
        """Shortcut for ``client.trust.get_weighted_reputation``."""
        return self.trust.get_weighted_reputation(agent_id, query)

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "AgentTrustClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
