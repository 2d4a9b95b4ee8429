"""
Contract bindings over JSON-RPC.

A Contract pairs an address with its ABI table and a transport. Reads go
through ``eth_call``. Writes go through ``eth_sendTransaction`` from the
configured sender account, so signing and nonce assignment stay with the
node or wallet that owns that account; the SDK never handles keys.
"""

import asyncio
import time
from typing import TYPE_CHECKING, Any

from eth_utils import to_checksum_address

from agenttrust.abi import ContractABI
from agenttrust.exceptions import (
    AgentTrustError,
    SignerRequiredError,
    TransactionFailedError,
    TransactionTimeoutError,
)
from agenttrust.logging import get_logger, log_transaction
from agenttrust.types.transactions import LogEntry, TransactionReceipt

if TYPE_CHECKING:
    from agenttrust.async_transport import AsyncRPCTransport
    from agenttrust.transport import RPCTransport

logger = get_logger("contract")

DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 1.0


def parse_receipt(raw: dict[str, Any]) -> TransactionReceipt:
    """Build a TransactionReceipt from an eth_getTransactionReceipt result."""
    return TransactionReceipt(
        transaction_hash=raw["transactionHash"],
        block_number=int(raw.get("blockNumber") or "0x0", 16),
        status=int(raw.get("status") or "0x0", 16),
        logs=[
            LogEntry(
                address=to_checksum_address(log["address"]),
                topics=[t.lower() for t in log.get("topics", [])],
                data=log.get("data", "0x"),
            )
            for log in raw.get("logs", [])
        ],
    )


def find_event_id(receipt: TransactionReceipt, topic: str) -> str | None:
    """
    Return the first indexed argument of the first log matching ``topic``.

    Registration events carry the new record's id in ``topics[1]``.
    """
    for log in receipt.logs:
        if log.topics and log.topics[0] == topic.lower():
            return log.topics[1] if len(log.topics) > 1 else None
    return None


class _ContractBase:
    """Shared state and request building for sync and async bindings."""

    def __init__(
        self,
        address: str,
        abi: ContractABI,
        sender: str | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.address = to_checksum_address(address)
        self.abi = abi
        self.sender = to_checksum_address(sender) if sender else None
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval

    def _call_params(self, function: str, args: tuple[Any, ...]) -> list[Any]:
        tx: dict[str, Any] = {
            "to": self.address,
            "data": self.abi.function(function).encode_call(*args),
        }
        if self.sender:
            tx["from"] = self.sender
        return [tx, "latest"]

    def _send_params(self, function: str, args: tuple[Any, ...]) -> list[Any]:
        if not self.sender:
            raise SignerRequiredError()
        return [
            {
                "from": self.sender,
                "to": self.address,
                "data": self.abi.function(function).encode_call(*args),
            }
        ]

    def _decode(self, function: str, raw: str | None) -> Any:
        fn = self.abi.function(function)
        if fn.outputs and raw in (None, "0x"):
            raise AgentTrustError(
                "EMPTY_RESULT",
                f"{self.abi.name}.{function} returned no data; is {self.address} deployed?",
            )
        return fn.decode_result(raw or "0x")

    def _check_receipt(self, function: str, receipt: TransactionReceipt) -> TransactionReceipt:
        if not receipt.succeeded:
            log_transaction("failed", self.address, function, receipt.transaction_hash)
            raise TransactionFailedError(
                receipt.transaction_hash,
                f"{self.abi.name}.{function} reverted in block {receipt.block_number}",
            )
        log_transaction("mined", self.address, function, receipt.transaction_hash)
        return receipt

    def event_id(self, receipt: TransactionReceipt, event: str) -> str | None:
        """Extract the id emitted by ``event`` in a receipt, if present."""
        event_id = find_event_id(receipt, self.abi.event(event).topic)
        if event_id is None:
            logger.warning(
                "%s event not found in receipt %s", event, receipt.transaction_hash
            )
        return event_id


class Contract(_ContractBase):
    """Synchronous contract binding."""

    def __init__(
        self,
        address: str,
        abi: ContractABI,
        transport: "RPCTransport",
        sender: str | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """
        Initialize the binding.

        Args:
            address: Deployed contract address
            abi: Function/event table for the contract
            transport: JSON-RPC transport
            sender: Account used for transactions (None for read-only)
            receipt_timeout: Seconds to wait for a transaction to be mined
            poll_interval: Seconds between receipt polls
        """
        super().__init__(address, abi, sender, receipt_timeout, poll_interval)
        self.transport = transport

    def call(self, function: str, *args: Any) -> Any:
        """Execute a read-only call and decode its result."""
        raw = self.transport.request("eth_call", self._call_params(function, args))
        return self._decode(function, raw)

    def transact(self, function: str, *args: Any) -> TransactionReceipt:
        """
        Send a transaction and wait for it to be mined.

        Raises:
            SignerRequiredError: If no sender is configured
            TransactionFailedError: If the transaction reverted
            TransactionTimeoutError: If it is not mined in time
        """
        params = self._send_params(function, args)
        tx_hash = self.transport.request("eth_sendTransaction", params)
        log_transaction("send", self.address, function, tx_hash)
        receipt = self.wait_for_receipt(tx_hash)
        return self._check_receipt(function, receipt)

    def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Poll eth_getTransactionReceipt until the transaction is mined."""
        deadline = time.monotonic() + self.receipt_timeout
        while True:
            raw = self.transport.request("eth_getTransactionReceipt", [tx_hash])
            if raw is not None:
                return parse_receipt(raw)
            if time.monotonic() >= deadline:
                raise TransactionTimeoutError(tx_hash, self.receipt_timeout)
            time.sleep(self.poll_interval)


class AsyncContract(_ContractBase):
    """Asynchronous contract binding."""

    def __init__(
        self,
        address: str,
        abi: ContractABI,
        transport: "AsyncRPCTransport",
        sender: str | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__(address, abi, sender, receipt_timeout, poll_interval)
        self.transport = transport

    async def call(self, function: str, *args: Any) -> Any:
        """Execute a read-only call and decode its result."""
        raw = await self.transport.request("eth_call", self._call_params(function, args))
        return self._decode(function, raw)

    async def transact(self, function: str, *args: Any) -> TransactionReceipt:
        """Send a transaction and wait for it to be mined."""
        params = self._send_params(function, args)
        tx_hash = await self.transport.request("eth_sendTransaction", params)
        log_transaction("send", self.address, function, tx_hash)
        receipt = await self.wait_for_receipt(tx_hash)
        return self._check_receipt(function, receipt)

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Poll eth_getTransactionReceipt until the transaction is mined."""
        deadline = time.monotonic() + self.receipt_timeout
        while True:
            raw = await self.transport.request("eth_getTransactionReceipt", [tx_hash])
            if raw is not None:
                return parse_receipt(raw)
            if time.monotonic() >= deadline:
                raise TransactionTimeoutError(tx_hash, self.receipt_timeout)
            await asyncio.sleep(self.poll_interval)
