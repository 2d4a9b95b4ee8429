"""Agent Trust SDK contract clients."""

from agenttrust.clients.interactions import InteractionsClient
from agenttrust.clients.schemas import SchemasClient
from agenttrust.clients.trust import TrustClient

__all__ = [
    "InteractionsClient",
    "SchemasClient",
    "TrustClient",
]
