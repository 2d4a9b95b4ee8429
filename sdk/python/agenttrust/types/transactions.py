"""Transaction receipt data models."""

from dataclasses import dataclass, field


@dataclass
class LogEntry:
    """A single event log emitted by a transaction."""

    address: str
    topics: list[str]
    data: str


@dataclass
class TransactionReceipt:
    """Mined transaction receipt."""

    transaction_hash: str
    block_number: int
    status: int  # 1 success, 0 reverted
    logs: list[LogEntry] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == 1
