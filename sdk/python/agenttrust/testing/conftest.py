"""
Pytest plugin for Agent Trust SDK testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["agenttrust.testing.conftest"]

Or import the fixtures directly:

    from agenttrust.testing.fixtures import mock_client, sample_attestation
"""

# Re-export all fixtures for pytest auto-discovery
from agenttrust.testing.fixtures import (
    contract_addresses,
    mock_agent_id,
    mock_client,
    mock_client_with_attestations,
    read_only_mock_client,
    sample_attestation,
    sample_attestations,
    sample_interaction,
    sample_reputation,
    sample_schema,
)

__all__ = [
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
]
