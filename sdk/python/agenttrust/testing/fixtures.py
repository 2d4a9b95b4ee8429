"""
Pytest fixtures for Agent Trust SDK testing.

Provides common fixtures for testing applications that use the Agent Trust SDK.
"""

from typing import Any, Generator

import pytest

from agenttrust.testing.mock import MockAgentTrustClient
from agenttrust.types.config import ContractAddresses
from agenttrust.types.interactions import Interaction
from agenttrust.types.schemas import Schema
from agenttrust.types.trust import Attestation, WeightedReputation

ZERO_BYTES32 = "0x" + "00" * 32


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockAgentTrustClient, None, None]:
    """
    Provide a MockAgentTrustClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.trust.add_attestation(create_mock_attestation(to_agent=1))
            result = my_function(mock_client)
            assert mock_client.was_called("trust.get_weighted_reputation")
        ```
    """
    client = MockAgentTrustClient()
    yield client
    client.reset()


@pytest.fixture
def read_only_mock_client() -> MockAgentTrustClient:
    """Provide a MockAgentTrustClient without a sender."""
    return MockAgentTrustClient(sender=None)


@pytest.fixture
def mock_agent_id() -> int:
    """Provide a test agent id."""
    return 42


@pytest.fixture
def contract_addresses() -> ContractAddresses:
    """Provide placeholder contract addresses."""
    return ContractAddresses(
        interaction_registry="0x1000000000000000000000000000000000000001",
        attestation_schema_registry="0x2000000000000000000000000000000000000002",
        trust_graph="0x3000000000000000000000000000000000000003",
    )


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_attestation() -> Attestation:
    """Provide a sample Attestation object."""
    return create_mock_attestation()


@pytest.fixture
def sample_attestations() -> list[Attestation]:
    """Provide attestations spanning two categories of one namespace."""
    return [
        create_mock_attestation(namespace="a", tag="x", score=80),
        create_mock_attestation(namespace="a", tag="x", score=100),
        create_mock_attestation(namespace="a", tag="y", score=50),
    ]


@pytest.fixture
def sample_interaction() -> Interaction:
    """Provide a sample Interaction object."""
    return create_mock_interaction()


@pytest.fixture
def sample_schema() -> Schema:
    """Provide a sample Schema object."""
    return create_mock_schema()


@pytest.fixture
def sample_reputation() -> WeightedReputation:
    """Provide a sample WeightedReputation object."""
    return WeightedReputation(
        overall=70.0,
        by_category={},
        decay_factor=0.98,
        risk_level="critical",
        suspicion_score=0.0,
        total_attestations=3,
    )


@pytest.fixture
def mock_client_with_attestations(
    mock_client: MockAgentTrustClient,
    mock_agent_id: int,
    sample_attestations: list[Attestation],
) -> MockAgentTrustClient:
    """Provide a mock client whose ledger holds sample_attestations about mock_agent_id."""
    for attestation in sample_attestations:
        attestation.to_agent = mock_agent_id
        mock_client.trust.add_attestation(attestation)
    return mock_client


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_attestation(
    from_agent: int = 1,
    to_agent: int = 42,
    namespace: str = "compute-market.v1",
    tag: str = "service.quality",
    score: int = 90,
    **kwargs: Any,
) -> Attestation:
    """
    Create an Attestation with customizable fields.

    Args:
        from_agent: Attesting agent id
        to_agent: Agent the attestation is about
        namespace: Schema namespace
        tag: Tag within the namespace
        score: Score
        **kwargs: Additional fields to override

    Returns:
        Attestation object
    """
    defaults: dict[str, Any] = {
        "interaction_id": ZERO_BYTES32,
        "comment": "",
        "timestamp": 1_700_000_000,
    }
    defaults.update(kwargs)
    return Attestation(
        from_agent=from_agent,
        to_agent=to_agent,
        namespace=namespace,
        tag=tag,
        score=score,
        **defaults,
    )


def create_mock_interaction(
    agent_a: int = 1,
    agent_b: int = 42,
    interaction_type: str = "service_delivery",
    **kwargs: Any,
) -> Interaction:
    """
    Create an Interaction with customizable fields.

    Args:
        agent_a: Registering agent id
        agent_b: Counterparty agent id
        interaction_type: Interaction type
        **kwargs: Additional fields to override

    Returns:
        Interaction object
    """
    defaults: dict[str, Any] = {
        "interaction_hash": ZERO_BYTES32,
        "timestamp": 1_700_000_000,
        "verified": False,
    }
    defaults.update(kwargs)
    return Interaction(
        agent_a=agent_a,
        agent_b=agent_b,
        interaction_type=interaction_type,
        **defaults,
    )


def create_mock_schema(
    namespace: str = "compute-market.v1",
    **kwargs: Any,
) -> Schema:
    """
    Create a Schema with customizable fields.

    Args:
        namespace: Schema namespace
        **kwargs: Additional fields to override

    Returns:
        Schema object
    """
    defaults: dict[str, Any] = {
        "name": "Compute Market",
        "description": "Quality of compute jobs",
        "allowed_tags": ["service.quality", "service.latency"],
        "min_score": 0,
        "max_score": 100,
        "creator": "0x00000000000000000000000000000000000000A1",
        "created_at": 1_700_000_000,
        "active": True,
    }
    defaults.update(kwargs)
    return Schema(namespace=namespace, **defaults)


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "mock_client",
    "read_only_mock_client",
    "mock_agent_id",
    "contract_addresses",
    "sample_attestation",
    "sample_attestations",
    "sample_interaction",
    "sample_schema",
    "sample_reputation",
    "mock_client_with_attestations",
    # Helper functions
    "create_mock_attestation",
    "create_mock_interaction",
    "create_mock_schema",
]
