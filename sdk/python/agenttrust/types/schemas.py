"""Attestation schema registry data models."""

from dataclasses import dataclass


@dataclass
class Schema:
    """Attestation schema registered for a namespace."""

    namespace: str
    name: str
    description: str
    allowed_tags: list[str]
    min_score: int
    max_score: int
    creator: str
    created_at: int
    active: bool


@dataclass
class RegisteredSchema:
    """Result of registering a schema."""

    schema_id: str | None
    tx_hash: str
