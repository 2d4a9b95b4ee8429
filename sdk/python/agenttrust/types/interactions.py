"""Interaction registry data models."""

from dataclasses import dataclass


@dataclass
class Interaction:
    """An interaction recorded between two agents."""

    agent_a: int
    agent_b: int
    interaction_hash: str  # bytes32 hex
    interaction_type: str
    timestamp: int  # unix seconds, block time
    verified: bool


@dataclass
class RegisteredInteraction:
    """Result of registering an interaction."""

    interaction_id: str | None
    tx_hash: str
