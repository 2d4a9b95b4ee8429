"""
Client-side weighted reputation.

Aggregates an agent's attestations into a WeightedReputation report. The
computation is a pure function of the attestations and the optional
namespace/tag filter; it keeps no state between calls.

Despite the name, scores are averaged without weighting. Weighting by trust
graph proximity, time decay and suspicion scoring belong to the off-chain
indexer, so ``decay_factor`` is a fixed placeholder and ``suspicion_score``
is always zero here.
"""

from collections import defaultdict
from collections.abc import Iterable

from agenttrust.logging import get_logger
from agenttrust.types.trust import (
    Attestation,
    CategoryKey,
    RiskLevel,
    WeightedReputation,
    WeightedReputationQuery,
)

DECAY_FACTOR = 0.98

# (exclusive lower bound on attestation count, risk level), checked in order
RISK_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (20, "low"),
    (10, "medium"),
    (5, "high"),
)

logger = get_logger("reputation")


def classify_risk(attestation_count: int) -> RiskLevel:
    """
    Classify risk from the number of attestations an agent has received.

    More than 20 is "low", 11-20 "medium", 6-10 "high", anything else
    "critical".
    """
    for threshold, level in RISK_THRESHOLDS:
        if attestation_count > threshold:
            return level
    return "critical"


def _matches(attestation: Attestation, query: WeightedReputationQuery | None) -> bool:
    if query is None:
        return True
    if query.namespace and attestation.namespace != query.namespace:
        return False
    if query.tag and attestation.tag != query.tag:
        return False
    return True


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def compute_weighted_reputation(
    attestations: Iterable[Attestation],
    query: WeightedReputationQuery | None = None,
) -> WeightedReputation:
    """
    Compute a reputation report from attestations about a single agent.

    Attestations are grouped by (namespace, tag). Each group scores the mean
    of its attestations and ``overall`` is the mean of the group scores, so a
    category with one attestation counts as much as one with fifty.

    The namespace/tag filter only narrows the categories. ``risk_level`` and
    ``total_attestations`` always reflect every attestation passed in.

    Args:
        attestations: All attestations resolved for the agent
        query: Optional namespace and/or tag filter

    Returns:
        WeightedReputation report
    """
    attestations = list(attestations)

    grouped: dict[CategoryKey, list[float]] = defaultdict(list)
    for att in attestations:
        if _matches(att, query):
            grouped[CategoryKey(att.namespace, att.tag)].append(att.score)

    by_category = {key: _mean(scores) for key, scores in grouped.items()}
    overall = _mean(list(by_category.values())) if by_category else 0.0

    total = len(attestations)
    risk_level = classify_risk(total)

    logger.debug(
        "Computed reputation: attestations=%d categories=%d overall=%.4f risk=%s",
        total,
        len(by_category),
        overall,
        risk_level,
    )

    return WeightedReputation(
        overall=overall,
        by_category=by_category,
        decay_factor=DECAY_FACTOR,
        risk_level=risk_level,
        suspicion_score=0.0,
        total_attestations=total,
    )


__all__ = [
    "DECAY_FACTOR",
    "RISK_THRESHOLDS",
    "classify_risk",
    "compute_weighted_reputation",
]
