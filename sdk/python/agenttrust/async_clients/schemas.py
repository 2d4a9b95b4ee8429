"""Async attestation schema registry client."""

from typing import TYPE_CHECKING

from agenttrust.clients.schemas import parse_schema
from agenttrust.types.schemas import RegisteredSchema, Schema

if TYPE_CHECKING:
    from agenttrust.contract import AsyncContract


class AsyncSchemasClient:
    """Async client for the AttestationSchemaRegistry contract."""

    def __init__(self, contract: "AsyncContract") -> None:
        self.contract = contract

    async def register(
        self,
        namespace: str,
        name: str,
        description: str,
        allowed_tags: list[str],
        min_score: int,
        max_score: int,
    ) -> RegisteredSchema:
        """Register an attestation schema for a namespace."""
        receipt = await self.contract.transact(
            "registerSchema",
            namespace,
            name,
            description,
            list(allowed_tags),
            min_score,
            max_score,
        )
        return RegisteredSchema(
            schema_id=self.contract.event_id(receipt, "SchemaRegistered"),
            tx_hash=receipt.transaction_hash,
        )

    async def get(self, namespace: str) -> Schema:
        """Get the schema registered for a namespace."""
        return parse_schema(await self.contract.call("getSchemaByNamespace", namespace))

    async def is_active(self, namespace: str) -> bool:
        """Check whether the namespace's schema is active."""
        return await self.contract.call("isSchemaActive", namespace)
