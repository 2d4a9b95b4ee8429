"""Deployment configuration models."""

from dataclasses import dataclass, fields

from eth_utils import is_address, to_checksum_address

from agenttrust.exceptions import ConfigurationError


@dataclass
class ContractAddresses:
    """Addresses of the three protocol contracts on one chain."""

    interaction_registry: str
    attestation_schema_registry: str
    trust_graph: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not is_address(value):
                raise ConfigurationError(f"Invalid {f.name} address: {value!r}")
            setattr(self, f.name, to_checksum_address(value))
