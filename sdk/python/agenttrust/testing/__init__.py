"""Agent Trust SDK testing utilities.

Provides mock clients and fixtures for testing applications that use the
Agent Trust SDK.
"""

from agenttrust.testing.fixtures import (
    create_mock_attestation,
    create_mock_interaction,
    create_mock_schema,
)
from agenttrust.testing.mock import MockAgentTrustClient, MockCall, MockResponse

__all__ = [
    # Mock client
    "MockAgentTrustClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_attestation",
    "create_mock_interaction",
    "create_mock_schema",
]
