#!/usr/bin/env python3
"""
Basic Agent Trust SDK usage example.

Runs offline: exercises the exception hierarchy, calldata encoding,
interaction hashing and reputation aggregation against the mock client.
Run with: python examples/basic_usage.py
"""

from agenttrust import (
    AgentTrustError,
    ConfigurationError,
    WeightedReputationQuery,
    compute_weighted_reputation,
)
from agenttrust.abi import TRUST_GRAPH_ABI
from agenttrust.hashing import interaction_hash_to_bytes32
from agenttrust.testing import MockAgentTrustClient, create_mock_attestation

print("=== Agent Trust SDK Basic Usage Example ===\n")

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    raise ConfigurationError("AGENTTRUST_RPC_URL environment variable not set")
except AgentTrustError as e:
    print(f"   Caught AgentTrustError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")

print("\n   OK: Exception classes working\n")

# 2. Calldata encoding
print("2. Encoding a TrustGraph call...")
fn = TRUST_GRAPH_ABI.function("getTrustLevel")
calldata = fn.encode_call(1, 2)
print(f"   Signature: {fn.signature}")
print(f"   Selector:  {fn.selector}")
print(f"   Calldata:  {calldata[:26]}...")
assert calldata.startswith(fn.selector)

print("\n   OK: ABI encoding working\n")

# 3. Interaction references
print("3. Hashing interaction references...")
reference = "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"
digest = interaction_hash_to_bytes32(reference)
print(f"   {reference[:30]}... -> {digest}")
assert interaction_hash_to_bytes32(digest) == digest, "bytes32 values pass through"

print("\n   OK: Hashing working\n")

# 4. Reputation aggregation
print("4. Aggregating attestations...")
attestations = [
    create_mock_attestation(namespace="compute-market.v1", tag="service.quality", score=80),
    create_mock_attestation(namespace="compute-market.v1", tag="service.quality", score=100),
    create_mock_attestation(namespace="compute-market.v1", tag="service.latency", score=50),
]
report = compute_weighted_reputation(attestations)
for category, score in report.by_category.items():
    print(f"   {category}: {score:.1f}")
print(f"   Overall: {report.overall:.1f} (risk: {report.risk_level})")
assert report.overall == 70

latency = compute_weighted_reputation(attestations, WeightedReputationQuery(tag="service.latency"))
print(f"   Latency only: {latency.overall:.1f}")

print("\n   OK: Aggregation working\n")

# 5. Mock client
print("5. Using the mock client...")
with MockAgentTrustClient() as mock:
    registered = mock.interactions.register(7, reference, "service_delivery")
    mock.trust.submit_attestation(
        to_agent=7,
        namespace="compute-market.v1",
        tag="service.quality",
        score=92,
        interaction_id=registered.interaction_id,
    )
    print(f"   Reputation of agent 7: {mock.get_weighted_reputation(7).overall:.1f}")
    print(f"   Calls recorded: {[call.method for call in mock.get_calls()]}")

print("\n   OK: Mock client working\n")
