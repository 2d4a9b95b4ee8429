"""Interaction registry client."""

from typing import TYPE_CHECKING

from agenttrust.exceptions import SignerRequiredError
from agenttrust.hashing import agent_id_from_address, interaction_hash_to_bytes32
from agenttrust.types.interactions import Interaction, RegisteredInteraction

if TYPE_CHECKING:
    from agenttrust.contract import Contract


def parse_interaction(struct: tuple) -> Interaction:
    """Map a decoded getInteraction struct to an Interaction."""
    agent_a, agent_b, interaction_hash, interaction_type, timestamp, verified = struct
    return Interaction(
        agent_a=agent_a,
        agent_b=agent_b,
        interaction_hash=interaction_hash,
        interaction_type=interaction_type,
        timestamp=timestamp,
        verified=verified,
    )


class InteractionsClient:
    """Client for the InteractionRegistry contract."""

    def __init__(self, contract: "Contract") -> None:
        """
        Initialize the interactions client.

        Args:
            contract: Binding to the InteractionRegistry contract
        """
        self.contract = contract

    def register(
        self,
        agent_b: int,
        interaction_hash: str,
        interaction_type: str,
    ) -> RegisteredInteraction:
        """
        Register an interaction between the caller and another agent.

        Args:
            agent_b: Counterparty agent id
            interaction_hash: bytes32 hex, or any reference string (IPFS URI,
                URL) which is keccak256-hashed to bytes32
            interaction_type: Free-form type, e.g. "service_delivery"

        Returns:
            RegisteredInteraction with the emitted interaction id and tx hash

        Raises:
            SignerRequiredError: If the client has no sender account
        """
        if not self.contract.sender:
            raise SignerRequiredError()

        agent_a = agent_id_from_address(self.contract.sender)
        receipt = self.contract.transact(
            "registerInteraction",
            agent_a,
            agent_b,
            interaction_hash_to_bytes32(interaction_hash),
            interaction_type,
        )
        return RegisteredInteraction(
            interaction_id=self.contract.event_id(receipt, "InteractionRegistered"),
            tx_hash=receipt.transaction_hash,
        )

    def has_interacted(self, agent_a: int, agent_b: int) -> bool:
        """Check whether two agents have a registered interaction."""
        return self.contract.call("hasInteracted", agent_a, agent_b)

    def get(self, interaction_id: str) -> Interaction:
        """
        Get interaction details.

        Args:
            interaction_id: bytes32 interaction id

        Returns:
            Interaction record
        """
        return parse_interaction(self.contract.call("getInteraction", interaction_id))

    def get_between(self, agent_a: int, agent_b: int) -> list[str]:
        """Get the ids of all interactions between two agents."""
        return self.contract.call("getInteractionsBetween", agent_a, agent_b)
