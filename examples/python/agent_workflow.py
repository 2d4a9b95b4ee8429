#!/usr/bin/env python3
"""
Agent Trust Python SDK - Complete Agent Workflow Example

This example demonstrates the full attestation lifecycle:
1. Register an attestation schema
2. Register an interaction with a counterparty
3. Attest to the counterparty's service quality
4. Trust the counterparty
5. Compute its weighted reputation

Requires a chain with the protocol contracts deployed and an unlocked
sender account (e.g. anvil). Configure through AGENTTRUST_RPC_URL,
AGENTTRUST_INTERACTION_REGISTRY, AGENTTRUST_SCHEMA_REGISTRY,
AGENTTRUST_TRUST_GRAPH and AGENTTRUST_SENDER.
"""

import logging
import random
import string
import sys
from pathlib import Path

# Add SDK to path for development
sdk_path = Path(__file__).parent.parent.parent / "sdk" / "python"
sys.path.insert(0, str(sdk_path))

from agenttrust import AgentTrustClient, WeightedReputationQuery, configure_logging
from agenttrust.exceptions import AgentTrustError, ContractRevertError


def generate_random_suffix(length: int = 6) -> str:
    """Generate a random alphanumeric suffix."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def main() -> None:
    """Run the complete agent workflow example."""
    print("=== Agent Trust Python SDK Example ===\n")

    configure_logging(level=logging.WARNING, tx_level=logging.DEBUG)

    namespace = f"compute-market-{generate_random_suffix()}.v1"
    counterparty = int(sys.argv[1], 0) if len(sys.argv) > 1 else random.getrandbits(160)

    client = AgentTrustClient.from_env()

    try:
        # Step 1: Who am I
        print("1. Resolving sender...")
        me = client.get_agent_id()
        print(f"   Address: {client.get_address()}")
        print(f"   Agent ID: {me}")

        # Step 2: Register a schema for the namespace
        print("\n2. Registering schema...")
        schema = client.schemas.register(
            namespace=namespace,
            name="Compute Market",
            description="Quality and latency of compute jobs",
            allowed_tags=["service.quality", "service.latency"],
            min_score=0,
            max_score=100,
        )
        print(f"   Schema ID: {schema.schema_id}")
        print(f"   Active: {client.schemas.is_active(namespace)}")

        # Step 3: Register the interaction being attested
        print("\n3. Registering interaction...")
        interaction = client.interactions.register(
            agent_b=counterparty,
            interaction_hash=f"ipfs://job-receipt-{generate_random_suffix(12)}",
            interaction_type="service_delivery",
        )
        print(f"   Interaction ID: {interaction.interaction_id}")
        print(f"   Tx: {interaction.tx_hash}")

        # Step 4: Attest
        print("\n4. Submitting attestations...")
        for tag, score in (("service.quality", 92), ("service.latency", 71)):
            tx_hash = client.trust.submit_attestation(
                to_agent=counterparty,
                namespace=namespace,
                tag=tag,
                score=score,
                interaction_id=interaction.interaction_id,
            )
            print(f"   {tag} = {score} ({tx_hash})")

        # Step 5: Trust edge
        print("\n5. Setting trust...")
        client.trust.set_trust(counterparty, 80)
        print(f"   Trust level: {client.trust.get_trust_level(me, counterparty)}")

        # Step 6: Reputation
        print("\n6. Computing weighted reputation...")
        report = client.get_weighted_reputation(counterparty)
        for category, score in report.by_category.items():
            print(f"   {category}: {score:.1f}")
        print(f"   Overall: {report.overall:.1f}")
        print(f"   Attestations: {report.total_attestations} (risk: {report.risk_level})")

        quality = client.get_weighted_reputation(
            counterparty, WeightedReputationQuery(namespace=namespace, tag="service.quality")
        )
        print(f"   Quality only: {quality.overall:.1f}")

        print("\n=== Workflow Complete ===")

    except ContractRevertError as e:
        print(f"\nReverted: {e.message}")
        if e.revert_data:
            print(f"Revert data: {e.revert_data}")
        sys.exit(1)
    except AgentTrustError as e:
        print(f"\nError: [{e.code}] {e.message}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
