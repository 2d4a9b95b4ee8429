"""Agent Trust SDK async contract clients."""

from agenttrust.async_clients.interactions import AsyncInteractionsClient
from agenttrust.async_clients.schemas import AsyncSchemasClient
from agenttrust.async_clients.trust import AsyncTrustClient

__all__ = [
    "AsyncInteractionsClient",
    "AsyncSchemasClient",
    "AsyncTrustClient",
]
