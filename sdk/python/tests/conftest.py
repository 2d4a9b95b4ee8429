"""
Shared helpers for Agent Trust SDK tests.

FakeNode stands in for a JSON-RPC endpoint: it answers eth_call from
per-function handlers (encoding results with eth-abi), hands out
transaction hashes for eth_sendTransaction and serves configured receipts.
"""

from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from eth_abi import decode, encode
from eth_utils import to_checksum_address

from agenttrust.abi import ContractABI, ContractFunction
from agenttrust.client import AgentTrustClient
from agenttrust.types.config import ContractAddresses

SENDER = to_checksum_address("0x00000000000000000000000000000000000000a1")

ADDRESSES = ContractAddresses(
    interaction_registry="0x1000000000000000000000000000000000000001",
    attestation_schema_registry="0x2000000000000000000000000000000000000002",
    trust_graph="0x3000000000000000000000000000000000000003",
)


def b32(n: int) -> bytes:
    """bytes32 value for a small integer."""
    return n.to_bytes(32, "big")


def h32(n: int) -> str:
    """bytes32 hex for a small integer."""
    return "0x" + b32(n).hex()


def make_http_response(
    status_code: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.json.return_value = body if body is not None else {}
    return response


class FakeNode:
    """In-memory JSON-RPC endpoint for one or more contracts."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.sent: list[dict[str, Any]] = []
        self._handlers: dict[str, tuple[ContractFunction, Callable[..., Any]]] = {}
        self._receipt_logs: list[dict[str, Any]] = []
        self._receipt_status = "0x1"
        self._pending_polls = 0
        self._tx_counter = 0

    # -- configuration -----------------------------------------------------

    def on_call(self, abi: ContractABI, function: str, handler: Callable[..., Any]) -> None:
        """
        Answer eth_call to ``function`` with ``handler(*decoded_args)``.

        The handler returns the function's output values as a tuple (or a
        bare value for single-output functions).
        """
        fn = abi.function(function)
        self._handlers[fn.selector] = (fn, handler)

    def returns(self, abi: ContractABI, function: str, value: Any) -> None:
        self.on_call(abi, function, lambda *args: value)

    def emit(self, address: str, topics: list[str], data: str = "0x") -> None:
        """Add a log to every subsequent receipt."""
        self._receipt_logs.append({"address": address, "topics": topics, "data": data})

    def fail_transactions(self) -> None:
        self._receipt_status = "0x0"

    def delay_receipts(self, polls: int) -> None:
        """Return null receipts for the next ``polls`` lookups."""
        self._pending_polls = polls

    # -- request handling --------------------------------------------------

    def post(self, url: str, json: dict[str, Any]) -> MagicMock:
        self.requests.append(json)
        method = json["method"]
        params = json["params"]

        if method == "eth_call":
            result = self._eth_call(params[0])
        elif method == "eth_sendTransaction":
            self.sent.append(params[0])
            self._tx_counter += 1
            result = h32(0xAB00 + self._tx_counter)
        elif method == "eth_getTransactionReceipt":
            result = self._receipt(params[0])
        else:
            return make_http_response(
                body={
                    "jsonrpc": "2.0",
                    "id": json["id"],
                    "error": {"code": -32601, "message": f"method {method} not found"},
                }
            )

        return make_http_response(body={"jsonrpc": "2.0", "id": json["id"], "result": result})

    async def apost(self, url: str, json: dict[str, Any]) -> MagicMock:
        return self.post(url, json=json)

    def _eth_call(self, tx: dict[str, Any]) -> str:
        data = tx["data"]
        fn, handler = self._handlers[data[:10]]
        args = decode(list(fn.inputs), bytes.fromhex(data[10:]))
        value = handler(*args)
        if len(fn.outputs) == 1:
            value = (value,)
        return "0x" + encode(list(fn.outputs), list(value)).hex()

    def _receipt(self, tx_hash: str) -> dict[str, Any] | None:
        if self._pending_polls > 0:
            self._pending_polls -= 1
            return None
        return {
            "transactionHash": tx_hash,
            "blockNumber": "0x10",
            "status": self._receipt_status,
            "logs": list(self._receipt_logs),
        }


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def client(node: FakeNode) -> Iterator[AgentTrustClient]:
    """AgentTrustClient with a sender, wired to the fake node."""
    c = AgentTrustClient(
        rpc_url="http://localhost:8545",
        addresses=ADDRESSES,
        sender=SENDER,
        poll_interval=0,
    )
    with patch.object(c.transport._client, "post", side_effect=node.post):
        yield c
    c.close()


@pytest.fixture
def read_only_client(node: FakeNode) -> Iterator[AgentTrustClient]:
    """AgentTrustClient without a sender, wired to the fake node."""
    c = AgentTrustClient(rpc_url="http://localhost:8545", addresses=ADDRESSES)
    with patch.object(c.transport._client, "post", side_effect=node.post):
        yield c
    c.close()
