"""Agent Trust SDK type definitions.

This module exports all data model types used by the SDK.
"""

from agenttrust.types.config import ContractAddresses
from agenttrust.types.interactions import Interaction, RegisteredInteraction
from agenttrust.types.schemas import RegisteredSchema, Schema
from agenttrust.types.transactions import LogEntry, TransactionReceipt
from agenttrust.types.trust import (
    Attestation,
    CategoryKey,
    RiskLevel,
    TrustEdge,
    WeightedReputation,
    WeightedReputationQuery,
)

__all__ = [
    # Configuration
    "ContractAddresses",
    # Interaction registry
    "Interaction",
    "RegisteredInteraction",
    # Schema registry
    "Schema",
    "RegisteredSchema",
    # Trust graph
    "Attestation",
    "TrustEdge",
    "CategoryKey",
    "RiskLevel",
    "WeightedReputation",
    "WeightedReputationQuery",
    # Transactions
    "LogEntry",
    "TransactionReceipt",
]
