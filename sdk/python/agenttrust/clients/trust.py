"""Trust graph client."""

from typing import TYPE_CHECKING

from agenttrust.reputation import compute_weighted_reputation
from agenttrust.types.trust import (
    Attestation,
    WeightedReputation,
    WeightedReputationQuery,
)

if TYPE_CHECKING:
    from agenttrust.contract import Contract


def parse_attestation(struct: tuple) -> Attestation:
    """Map a decoded getAttestation struct to an Attestation."""
    (
        from_agent,
        to_agent,
        namespace,
        tag,
        score,
        interaction_id,
        comment,
        timestamp,
    ) = struct
    return Attestation(
        from_agent=from_agent,
        to_agent=to_agent,
        namespace=namespace,
        tag=tag,
        score=score,
        interaction_id=interaction_id,
        comment=comment,
        timestamp=timestamp,
    )


class TrustClient:
    """Client for the TrustGraph contract: trust edges and attestations."""

    def __init__(self, contract: "Contract") -> None:
        """
        Initialize the trust client.

        Args:
            contract: Binding to the TrustGraph contract
        """
        self.contract = contract

    def set_trust(self, to_agent: int, trust_level: int) -> str:
        """
        Set the caller's trust level for another agent.

        Args:
            to_agent: Agent being trusted
            trust_level: Trust level (uint8)

        Returns:
            Transaction hash
        """
        receipt = self.contract.transact("setTrust", to_agent, trust_level)
        return receipt.transaction_hash

    def remove_trust(self, to_agent: int) -> str:
        """Remove the caller's trust edge to another agent. Returns the tx hash."""
        receipt = self.contract.transact("removeTrust", to_agent)
        return receipt.transaction_hash

    def submit_attestation(
        self,
        to_agent: int,
        namespace: str,
        tag: str,
        score: int,
        interaction_id: str,
        comment: str = "",
    ) -> str:
        """
        Submit an attestation about another agent.

        Args:
            to_agent: Agent the attestation is about
            namespace: Schema namespace, e.g. "compute-market.v1"
            tag: Tag within the namespace, e.g. "service.quality"
            score: Score within the schema's bounds (uint8)
            interaction_id: bytes32 id of the corroborating interaction
            comment: Optional free text

        Returns:
            Transaction hash

        Raises:
            SignerRequiredError: If the client has no sender account
            ValidationError: If score or interaction_id cannot be encoded
            ContractRevertError: If the contract rejects the attestation
        """
        receipt = self.contract.transact(
            "submitAttestation",
            to_agent,
            namespace,
            tag,
            score,
            interaction_id,
            comment,
        )
        return receipt.transaction_hash

    def get_trust_level(self, from_agent: int, to_agent: int) -> int:
        """Get the trust level from one agent to another."""
        return self.contract.call("getTrustLevel", from_agent, to_agent)

    def get_trusted_agents(self, agent_id: int) -> list[int]:
        """Get every agent the given agent trusts."""
        return self.contract.call("getTrustedAgents", agent_id)

    def get_attestation(self, attestation_id: str) -> Attestation:
        """Get attestation details by bytes32 id."""
        return parse_attestation(self.contract.call("getAttestation", attestation_id))

    def get_attestations(self, agent_id: int) -> list[str]:
        """Get the ids of all attestations about an agent."""
        return self.contract.call("getAttestations", agent_id)

    def get_attestations_by_tag(
        self, agent_id: int, namespace: str, tag: str
    ) -> list[str]:
        """Get the ids of an agent's attestations under one namespace/tag."""
        return self.contract.call("getAttestationsByTag", agent_id, namespace, tag)

    def list_attestations(self, agent_id: int) -> list[Attestation]:
        """Resolve every attestation about an agent."""
        return [self.get_attestation(aid) for aid in self.get_attestations(agent_id)]

    def get_weighted_reputation(
        self,
        agent_id: int,
        query: WeightedReputationQuery | None = None,
    ) -> WeightedReputation:
        """
        Calculate an agent's weighted reputation client-side.

        Fetches every attestation about the agent and aggregates them with
        compute_weighted_reputation(). For large attestation sets prefer the
        off-chain indexer, which also supplies decay and suspicion scoring.

        Args:
            agent_id: Agent to score
            query: Optional namespace/tag filter

        Returns:
            WeightedReputation report
        """
        return compute_weighted_reputation(self.list_attestations(agent_id), query)
