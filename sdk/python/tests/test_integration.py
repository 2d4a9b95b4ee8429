"""
Integration tests for the Agent Trust Python SDK.

These tests run against a development chain (anvil, hardhat) with the three
protocol contracts deployed and an unlocked sender account, and verify
end-to-end workflows.

Required environment:
    AGENTTRUST_INTEGRATION_TESTS=1
    AGENTTRUST_RPC_URL, AGENTTRUST_INTERACTION_REGISTRY,
    AGENTTRUST_SCHEMA_REGISTRY, AGENTTRUST_TRUST_GRAPH, AGENTTRUST_SENDER
"""

import asyncio
import os
import uuid
from collections.abc import Iterator

import pytest

from agenttrust.async_client import AsyncAgentTrustClient
from agenttrust.client import AgentTrustClient
from agenttrust.exceptions import ContractRevertError
from agenttrust.types.trust import CategoryKey, WeightedReputation, WeightedReputationQuery

# Skip all integration tests if no chain is available
pytestmark = pytest.mark.skipif(
    os.environ.get("AGENTTRUST_INTEGRATION_TESTS") != "1",
    reason="Integration tests require AGENTTRUST_INTEGRATION_TESTS=1 and a dev chain",
)


def generate_unique_namespace(prefix: str) -> str:
    """Generate a unique namespace for test schemas."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}.v1"


def generate_agent_id() -> int:
    """A fresh counterparty agent id (a random 20-byte address as uint256)."""
    return int.from_bytes(uuid.uuid4().bytes + uuid.uuid4().bytes[:4], "big")


@pytest.fixture
def client() -> Iterator[AgentTrustClient]:
    with AgentTrustClient.from_env() as c:
        yield c


@pytest.fixture
def namespace(client: AgentTrustClient) -> str:
    ns = generate_unique_namespace("it")
    client.schemas.register(
        namespace=ns,
        name="Integration",
        description="Schema registered by the integration suite",
        allowed_tags=["service.quality", "service.latency"],
        min_score=0,
        max_score=100,
    )
    return ns


# ============================================================================
# Schema registry
# ============================================================================


class TestSchemaRegistry:
    def test_register_and_get(self, client: AgentTrustClient) -> None:
        ns = generate_unique_namespace("schema")

        registered = client.schemas.register(ns, "Name", "Desc", ["t1", "t2"], 0, 100)

        assert registered.tx_hash.startswith("0x")
        assert registered.schema_id is not None

        schema = client.schemas.get(ns)
        assert schema.namespace == ns
        assert schema.allowed_tags == ["t1", "t2"]
        assert schema.creator == client.get_address()
        assert client.schemas.is_active(ns)

    def test_unknown_namespace_inactive(self, client: AgentTrustClient) -> None:
        assert not client.schemas.is_active(generate_unique_namespace("missing"))


# ============================================================================
# Interactions and attestations
# ============================================================================


class TestAttestationWorkflow:
    """Register interaction → attest → read back → reputation."""

    def test_full_workflow(self, client: AgentTrustClient, namespace: str) -> None:
        me = client.get_agent_id()
        other = generate_agent_id()

        registered = client.interactions.register(
            agent_b=other,
            interaction_hash=f"ipfs://job-{uuid.uuid4().hex}",
            interaction_type="service_delivery",
        )
        assert registered.interaction_id is not None
        assert client.interactions.has_interacted(me, other)
        assert registered.interaction_id in client.interactions.get_between(me, other)

        interaction = client.interactions.get(registered.interaction_id)
        assert interaction.agent_a == me
        assert interaction.agent_b == other
        assert interaction.interaction_type == "service_delivery"

        client.trust.submit_attestation(
            to_agent=other,
            namespace=namespace,
            tag="service.quality",
            score=80,
            interaction_id=registered.interaction_id,
        )
        client.trust.submit_attestation(
            to_agent=other,
            namespace=namespace,
            tag="service.latency",
            score=60,
            interaction_id=registered.interaction_id,
            comment="slow start",
        )

        ids = client.trust.get_attestations(other)
        assert len(ids) == 2
        by_tag = client.trust.get_attestations_by_tag(other, namespace, "service.latency")
        assert len(by_tag) == 1
        assert client.trust.get_attestation(by_tag[0]).comment == "slow start"

        report = client.get_weighted_reputation(other)
        assert report.by_category == {
            CategoryKey(namespace, "service.quality"): 80,
            CategoryKey(namespace, "service.latency"): 60,
        }
        assert report.overall == 70
        assert report.total_attestations == 2
        assert report.risk_level == "critical"

        filtered = client.get_weighted_reputation(
            other, WeightedReputationQuery(tag="service.quality")
        )
        assert filtered.overall == 80

    def test_attestation_on_unregistered_namespace_reverts(
        self, client: AgentTrustClient
    ) -> None:
        other = generate_agent_id()
        registered = client.interactions.register(other, "ref", "service_delivery")

        with pytest.raises(ContractRevertError):
            client.trust.submit_attestation(
                to_agent=other,
                namespace=generate_unique_namespace("missing"),
                tag="service.quality",
                score=50,
                interaction_id=registered.interaction_id,
            )


# ============================================================================
# Trust edges
# ============================================================================


class TestTrustEdges:
    def test_set_and_remove_trust(self, client: AgentTrustClient) -> None:
        me = client.get_agent_id()
        other = generate_agent_id()

        client.trust.set_trust(other, 90)
        assert client.trust.get_trust_level(me, other) == 90
        assert other in client.trust.get_trusted_agents(me)

        client.trust.remove_trust(other)
        assert client.trust.get_trust_level(me, other) == 0
        assert other not in client.trust.get_trusted_agents(me)


class TestAsyncClient:
    def test_async_reputation_matches_sync(self, client: AgentTrustClient) -> None:
        me = client.get_agent_id()

        async def run() -> WeightedReputation:
            async with AsyncAgentTrustClient.from_env() as async_client:
                return await async_client.get_weighted_reputation(me)

        assert asyncio.run(run()) == client.get_weighted_reputation(me)
