"""
Agent Trust SDK async client.

Provides the async interface for interacting with the Open Agent Trust
protocol contracts.
"""

from typing import Any

from agenttrust.abi import (
    INTERACTION_REGISTRY_ABI,
    SCHEMA_REGISTRY_ABI,
    TRUST_GRAPH_ABI,
)
from agenttrust.async_clients import (
    AsyncInteractionsClient,
    AsyncSchemasClient,
    AsyncTrustClient,
)
from agenttrust.async_transport import AsyncRPCTransport
from agenttrust.client import read_env_config, validate_sender
from agenttrust.contract import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    AsyncContract,
)
from agenttrust.exceptions import ConfigurationError, SignerRequiredError
from agenttrust.hashing import agent_id_from_address
from agenttrust.transport import RetryConfig
from agenttrust.types.config import ContractAddresses
from agenttrust.types.trust import WeightedReputation, WeightedReputationQuery


class AsyncAgentTrustClient:
    """
    Async client for the Open Agent Trust protocol.

    Uses httpx for async JSON-RPC. Attestation details are fetched
    concurrently when computing reputation.

    Example:
        ```python
        import asyncio
        from agenttrust import AsyncAgentTrustClient

        async def main():
            async with AsyncAgentTrustClient.from_env() as client:
                report = await client.get_weighted_reputation(agent_id)
                print(report.overall, report.risk_level)

        asyncio.run(main())
        ```
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
        Initialize the async Agent Trust client.

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

        self._transport = AsyncRPCTransport(
            rpc_url=rpc_url,
            timeout=timeout,
            retry_config=retry_config,
        )

        def bind(address: str, abi: Any) -> AsyncContract:
            return AsyncContract(
                address,
                abi,
                self._transport,
                sender=self.sender,
                receipt_timeout=receipt_timeout,
                poll_interval=poll_interval,
            )

        self.interactions = AsyncInteractionsClient(
            bind(addresses.interaction_registry, INTERACTION_REGISTRY_ABI)
        )
        self.schemas = AsyncSchemasClient(
            bind(addresses.attestation_schema_registry, SCHEMA_REGISTRY_ABI)
        )
        self.trust = AsyncTrustClient(bind(addresses.trust_graph, TRUST_GRAPH_ABI))

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncAgentTrustClient":
        """
        Create an async client from environment variables.

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls(timeout=timeout, retry_config=retry_config, **read_env_config())

    @property
    def transport(self) -> AsyncRPCTransport:
        """Get the underlying async JSON-RPC transport (for advanced use cases)."""
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
        """Get the agent id of the sender account."""
        return agent_id_from_address(self.get_address())

    async def get_weighted_reputation(
        self,
        agent_id: int,
        query: WeightedReputationQuery | None = None,
    ) -> WeightedReputation:
        """Shortcut for ``client.trust.get_weighted_reputation``."""
        return await self.trust.get_weighted_reputation(agent_id, query)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncAgentTrustClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
