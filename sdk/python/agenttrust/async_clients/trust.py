"""Async trust graph client."""

import asyncio
from typing import TYPE_CHECKING

from agenttrust.clients.trust import parse_attestation
from agenttrust.reputation import compute_weighted_reputation
from agenttrust.types.trust import (
    Attestation,
    WeightedReputation,
    WeightedReputationQuery,
)

if TYPE_CHECKING:
    from agenttrust.contract import AsyncContract


class AsyncTrustClient:
    """Async client for the TrustGraph contract."""

    def __init__(self, contract: "AsyncContract") -> None:
        """
        Initialize the async trust client.

        Args:
            contract: Async binding to the TrustGraph contract
        """
        self.contract = contract

    async def set_trust(self, to_agent: int, trust_level: int) -> str:
        """Set the caller's trust level for another agent. Returns the tx hash."""
        receipt = await self.contract.transact("setTrust", to_agent, trust_level)
        return receipt.transaction_hash

    async def remove_trust(self, to_agent: int) -> str:
        """Remove the caller's trust edge to another agent. Returns the tx hash."""
        receipt = await self.contract.transact("removeTrust", to_agent)
        return receipt.transaction_hash

    async def submit_attestation(
        self,
        to_agent: int,
        namespace: str,
        tag: str,
        score: int,
        interaction_id: str,
        comment: str = "",
    ) -> str:
        """Submit an attestation about another agent. Returns the tx hash."""
        receipt = await self.contract.transact(
            "submitAttestation",
            to_agent,
            namespace,
            tag,
            score,
            interaction_id,
            comment,
        )
        return receipt.transaction_hash

    async def get_trust_level(self, from_agent: int, to_agent: int) -> int:
        """Get the trust level from one agent to another."""
        return await self.contract.call("getTrustLevel", from_agent, to_agent)

    async def get_trusted_agents(self, agent_id: int) -> list[int]:
        """Get every agent the given agent trusts."""
        return await self.contract.call("getTrustedAgents", agent_id)

    async def get_attestation(self, attestation_id: str) -> Attestation:
        """Get attestation details by bytes32 id."""
        return parse_attestation(await self.contract.call("getAttestation", attestation_id))

    async def get_attestations(self, agent_id: int) -> list[str]:
        """Get the ids of all attestations about an agent."""
        return await self.contract.call("getAttestations", agent_id)

    async def get_attestations_by_tag(
        self, agent_id: int, namespace: str, tag: str
    ) -> list[str]:
        """Get the ids of an agent's attestations under one namespace/tag."""
        return await self.contract.call("getAttestationsByTag", agent_id, namespace, tag)

    async def list_attestations(self, agent_id: int) -> list[Attestation]:
        """Resolve every attestation about an agent, fetching details concurrently."""
        ids = await self.get_attestations(agent_id)
        tasks = [asyncio.ensure_future(self.get_attestation(aid)) for aid in ids]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # one fetch failed: stop the rest and collect their outcomes
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def get_weighted_reputation(
        self,
        agent_id: int,
        query: WeightedReputationQuery | None = None,
    ) -> WeightedReputation:
        """
        Calculate an agent's weighted reputation client-side.

        Args:
            agent_id: Agent to score
            query: Optional namespace/tag filter

        Returns:
            WeightedReputation report
        """
        return compute_weighted_reputation(await self.list_attestations(agent_id), query)
