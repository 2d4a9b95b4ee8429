"""
Hashing and identifier helpers.

Agents are identified on-chain by the uint256 value of their address, and
interaction payloads are referenced by a bytes32 digest.
"""

import re

from eth_utils import keccak, to_checksum_address

from agenttrust.exceptions import ValidationError

_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def is_bytes32_hex(value: str) -> bool:
    """Check whether value is a 0x-prefixed 32-byte hex string."""
    return bool(_BYTES32_RE.match(value))


def interaction_hash_to_bytes32(interaction_hash: str) -> str:
    """
    Normalize an interaction reference to bytes32.

    A value that is already ``0x`` followed by 64 hex characters is used
    as-is. Anything else (an IPFS URI, a URL, free text) is replaced by the
    keccak256 digest of its UTF-8 bytes.

    Args:
        interaction_hash: bytes32 hex or arbitrary reference string

    Returns:
        0x-prefixed lowercase bytes32 hex
    """
    if is_bytes32_hex(interaction_hash):
        return interaction_hash.lower()
    return "0x" + keccak(text=interaction_hash).hex()


def bytes32_to_bytes(value: str) -> bytes:
    """Convert a bytes32 hex string to raw bytes, validating its shape."""
    if not isinstance(value, str) or not is_bytes32_hex(value):
        raise ValidationError(f"Expected 0x-prefixed 32-byte hex, got {value!r}")
    return bytes.fromhex(value[2:])


def agent_id_from_address(address: str) -> int:
    """Agent id for an account: the address read as a uint256."""
    return int(to_checksum_address(address), 16)
