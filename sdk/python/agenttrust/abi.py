"""
Contract ABI definitions and codec.

Each protocol contract is described by a table of function and event
signatures. Calldata is ``selector || abi.encode(args)`` and results are
decoded with eth-abi, then normalized: bytes32 values become 0x-prefixed hex
strings and addresses become checksummed strings.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import (
    event_signature_to_log_topic,
    function_signature_to_4byte_selector,
    to_checksum_address,
)

from agenttrust.exceptions import AgentTrustError, ValidationError
from agenttrust.hashing import bytes32_to_bytes


def _split_tuple(type_str: str) -> list[str]:
    """Split "(a,(b,c),d[])" into its top-level component types."""
    inner = type_str[1:-1]
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in inner:
        if ch == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        current += ch
    if current:
        parts.append(current)
    return parts


def _prepare_arg(type_str: str, value: Any) -> Any:
    """Convert SDK-side values to what eth-abi expects."""
    if type_str.endswith("[]"):
        return [_prepare_arg(type_str[:-2], v) for v in value]
    if type_str.startswith("("):
        return tuple(
            _prepare_arg(t, v) for t, v in zip(_split_tuple(type_str), value)
        )
    if type_str == "bytes32" and isinstance(value, str):
        return bytes32_to_bytes(value)
    return value


def _normalize(type_str: str, value: Any) -> Any:
    """Convert eth-abi output to SDK-side values."""
    if type_str.endswith("[]"):
        return [_normalize(type_str[:-2], v) for v in value]
    if type_str.startswith("("):
        return tuple(
            _normalize(t, v) for t, v in zip(_split_tuple(type_str), value)
        )
    if type_str == "bytes32":
        return "0x" + bytes(value).hex()
    if type_str == "address":
        return to_checksum_address(value)
    return value


def _strip_hex(data: str) -> bytes:
    return bytes.fromhex(data[2:] if data.startswith("0x") else data)


@dataclass(frozen=True)
class ContractFunction:
    """A contract function: name, input types and output types."""

    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> str:
        return "0x" + function_signature_to_4byte_selector(self.signature).hex()

    def encode_call(self, *args: Any) -> str:
        """
        ABI-encode a call to this function.

        Raises:
            ValidationError: If the argument count or any value does not
                fit its ABI type
        """
        if len(args) != len(self.inputs):
            raise ValidationError(
                f"{self.name} expects {len(self.inputs)} arguments, got {len(args)}"
            )
        prepared = [_prepare_arg(t, v) for t, v in zip(self.inputs, args)]
        try:
            encoded = encode(list(self.inputs), prepared)
        except (EncodingError, TypeError, OverflowError) as e:
            raise ValidationError(f"Cannot encode arguments for {self.name}: {e}") from e
        return self.selector + encoded.hex()

    def decode_result(self, data: str) -> Any:
        """
        Decode the return data of an eth_call.

        A single output is returned bare; several outputs come back as a
        tuple. Functions with no outputs return None.
        """
        if not self.outputs:
            return None
        try:
            values = decode(list(self.outputs), _strip_hex(data))
        except (DecodingError, ValueError) as e:
            raise AgentTrustError(
                "DECODING_ERROR", f"Cannot decode {self.name} result: {e}"
            ) from e
        normalized = tuple(_normalize(t, v) for t, v in zip(self.outputs, values))
        if len(normalized) == 1:
            return normalized[0]
        return normalized


@dataclass(frozen=True)
class ContractEvent:
    """A contract event, identified by the keccak of its signature."""

    name: str
    inputs: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def topic(self) -> str:
        return "0x" + event_signature_to_log_topic(self.signature).hex()


class ContractABI:
    """Lookup table of one contract's functions and events."""

    def __init__(
        self,
        name: str,
        functions: Iterable[ContractFunction],
        events: Iterable[ContractEvent] = (),
    ) -> None:
        self.name = name
        self.functions = {fn.name: fn for fn in functions}
        self.events = {ev.name: ev for ev in events}

    def function(self, name: str) -> ContractFunction:
        try:
            return self.functions[name]
        except KeyError:
            raise ValidationError(f"{self.name} has no function {name!r}") from None

    def event(self, name: str) -> ContractEvent:
        try:
            return self.events[name]
        except KeyError:
            raise ValidationError(f"{self.name} has no event {name!r}") from None


# Struct layouts returned by the getters
INTERACTION_STRUCT = "(uint256,uint256,bytes32,string,uint256,bool)"
SCHEMA_STRUCT = "(string,string,string,string[],uint8,uint8,address,uint256,bool)"
ATTESTATION_STRUCT = "(uint256,uint256,string,string,uint8,bytes32,string,uint256)"


INTERACTION_REGISTRY_ABI = ContractABI(
    "InteractionRegistry",
    functions=[
        ContractFunction(
            "registerInteraction",
            ("uint256", "uint256", "bytes32", "string"),
            ("bytes32",),
        ),
        ContractFunction("hasInteracted", ("uint256", "uint256"), ("bool",)),
        ContractFunction("getInteraction", ("bytes32",), (INTERACTION_STRUCT,)),
        ContractFunction("getInteractionsBetween", ("uint256", "uint256"), ("bytes32[]",)),
    ],
    events=[
        ContractEvent("InteractionRegistered", ("bytes32", "uint256", "uint256", "string")),
    ],
)

SCHEMA_REGISTRY_ABI = ContractABI(
    "AttestationSchemaRegistry",
    functions=[
        ContractFunction(
            "registerSchema",
            ("string", "string", "string", "string[]", "uint8", "uint8"),
            ("bytes32",),
        ),
        ContractFunction("getSchemaByNamespace", ("string",), (SCHEMA_STRUCT,)),
        ContractFunction("isSchemaActive", ("string",), ("bool",)),
    ],
    events=[
        ContractEvent("SchemaRegistered", ("bytes32", "string", "address")),
    ],
)

TRUST_GRAPH_ABI = ContractABI(
    "TrustGraph",
    functions=[
        ContractFunction("setTrust", ("uint256", "uint8")),
        ContractFunction("removeTrust", ("uint256",)),
        ContractFunction(
            "submitAttestation",
            ("uint256", "string", "string", "uint8", "bytes32", "string"),
            ("bytes32",),
        ),
        ContractFunction("getTrustLevel", ("uint256", "uint256"), ("uint8",)),
        ContractFunction("getTrustedAgents", ("uint256",), ("uint256[]",)),
        ContractFunction("getAttestation", ("bytes32",), (ATTESTATION_STRUCT,)),
        ContractFunction("getAttestations", ("uint256",), ("bytes32[]",)),
        ContractFunction(
            "getAttestationsByTag", ("uint256", "string", "string"), ("bytes32[]",)
        ),
    ],
    events=[
        ContractEvent("TrustSet", ("uint256", "uint256", "uint8")),
        ContractEvent("TrustRemoved", ("uint256", "uint256")),
        ContractEvent(
            "AttestationSubmitted",
            ("bytes32", "uint256", "uint256", "string", "string", "uint8"),
        ),
    ],
)


__all__ = [
    "ContractABI",
    "ContractEvent",
    "ContractFunction",
    "INTERACTION_REGISTRY_ABI",
    "SCHEMA_REGISTRY_ABI",
    "TRUST_GRAPH_ABI",
]
