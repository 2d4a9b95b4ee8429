"""Attestation schema registry client."""

from typing import TYPE_CHECKING

from agenttrust.types.schemas import RegisteredSchema, Schema

if TYPE_CHECKING:
    from agenttrust.contract import Contract


def parse_schema(struct: tuple) -> Schema:
    """Map a decoded getSchemaByNamespace struct to a Schema."""
    (
        namespace,
        name,
        description,
        allowed_tags,
        min_score,
        max_score,
        creator,
        created_at,
        active,
    ) = struct
    return Schema(
        namespace=namespace,
        name=name,
        description=description,
        allowed_tags=list(allowed_tags),
        min_score=min_score,
        max_score=max_score,
        creator=creator,
        created_at=created_at,
        active=active,
    )


class SchemasClient:
    """Client for the AttestationSchemaRegistry contract."""

    def __init__(self, contract: "Contract") -> None:
        self.contract = contract

    def register(
        self,
        namespace: str,
        name: str,
        description: str,
        allowed_tags: list[str],
        min_score: int,
        max_score: int,
    ) -> RegisteredSchema:
        """
        Register an attestation schema for a namespace.

        Args:
            namespace: Namespace the schema governs, e.g. "compute-market.v1"
            name: Human readable name
            description: What attestations under this schema mean
            allowed_tags: Tags attesters may use
            min_score: Lowest allowed score (uint8)
            max_score: Highest allowed score (uint8)

        Returns:
            RegisteredSchema with the emitted schema id and tx hash

        Raises:
            SignerRequiredError: If the client has no sender account
            ValidationError: If a score bound does not fit uint8
        """
        receipt = self.contract.transact(
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

    def get(self, namespace: str) -> Schema:
        """Get the schema registered for a namespace."""
        return parse_schema(self.contract.call("getSchemaByNamespace", namespace))

    def is_active(self, namespace: str) -> bool:
        """Check whether the namespace's schema is active."""
        return self.contract.call("isSchemaActive", namespace)
