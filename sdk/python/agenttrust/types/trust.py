"""Trust graph and reputation data models."""

from dataclasses import dataclass, field
from typing import Literal, NamedTuple

RiskLevel = Literal["low", "medium", "high", "critical"]


@dataclass
class TrustEdge:
    """Directed trust relationship between two agents."""

    from_agent: int
    to_agent: int
    trust_level: int
    created_at: int
    last_updated: int


@dataclass
class Attestation:
    """A scored claim one agent makes about another."""

    from_agent: int
    to_agent: int
    namespace: str
    tag: str
    score: int
    interaction_id: str  # bytes32 hex of the corroborating interaction
    comment: str
    timestamp: int


class CategoryKey(NamedTuple):
    """Grouping key for reputation categories."""

    namespace: str
    tag: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.tag}"


@dataclass
class WeightedReputationQuery:
    """Optional filter for weighted reputation.

    ``viewer_agent_id`` is accepted for compatibility with the contract-side
    indexer API but does not affect the client-side computation.
    """

    namespace: str | None = None
    tag: str | None = None
    viewer_agent_id: int | None = None


@dataclass
class WeightedReputation:
    """Reputation summary computed from an agent's attestations."""

    overall: float
    by_category: dict[CategoryKey, float] = field(default_factory=dict)
    decay_factor: float = 0.98
    risk_level: RiskLevel = "critical"
    suspicion_score: float = 0.0
    total_attestations: int = 0
