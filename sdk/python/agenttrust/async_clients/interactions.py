"""Async interaction registry client."""

from typing import TYPE_CHECKING

from agenttrust.clients.interactions import parse_interaction
from agenttrust.exceptions import SignerRequiredError
from agenttrust.hashing import agent_id_from_address, interaction_hash_to_bytes32
from agenttrust.types.interactions import Interaction, RegisteredInteraction

if TYPE_CHECKING:
    from agenttrust.contract import AsyncContract


class AsyncInteractionsClient:
    """Async client for the InteractionRegistry contract."""

    def __init__(self, contract: "AsyncContract") -> None:
        """
        Initialize the async interactions client.

        Args:
            contract: Async binding to the InteractionRegistry contract
        """
        self.contract = contract

    async def register(
        self,
        agent_b: int,
        interaction_hash: str,
        interaction_type: str,
    ) -> RegisteredInteraction:
        """
        Register an interaction between the caller and another agent.

        Args:
            agent_b: Counterparty agent id
            interaction_hash: bytes32 hex, or any reference string which is
                keccak256-hashed to bytes32
            interaction_type: Free-form type, e.g. "service_delivery"

        Returns:
            RegisteredInteraction with the emitted interaction id and tx hash
        """
        if not self.contract.sender:
            raise SignerRequiredError()

        agent_a = agent_id_from_address(self.contract.sender)
        receipt = await self.contract.transact(
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

    async def has_interacted(self, agent_a: int, agent_b: int) -> bool:
        """Check whether two agents have a registered interaction."""
        return await self.contract.call("hasInteracted", agent_a, agent_b)

    async def get(self, interaction_id: str) -> Interaction:
        """Get interaction details by bytes32 id."""
        return parse_interaction(await self.contract.call("getInteraction", interaction_id))

    async def get_between(self, agent_a: int, agent_b: int) -> list[str]:
        """Get the ids of all interactions between two agents."""
        return await self.contract.call("getInteractionsBetween", agent_a, agent_b)
