from enum import Enum

from pydantic import BaseModel, Field


class Direction(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    YOURSELF = "yourself"
    UNKNOWN = "unknown"


class TxStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    ERROR = "error"


class TransactionRecord(BaseModel):
    id: str
    coin: int
    timestamp: int # unix seconds
    senders: list[str] = Field(default_factory=list)
    receivers: list[str] = Field(default_factory=list)
    memo: str | None = None
    token_id: str | None = None
    block: int | None = None
    fee: str | None = None
    status: TxStatus = TxStatus.COMPLETED
    type: str = "transfer"
    direction: Direction | None = None # Only set by the normalization pipeline

    def is_memo_valid(self, max_length: int) -> bool:
        if not self.memo:
            return True
        return len(self.memo) <= max_length and self.memo.isprintable()

    def direction_for(self, address: str) -> Direction:
        is_sender = address in self.senders
        is_receiver = address in self.receivers
        if is_sender and is_receiver:
            return Direction.YOURSELF
        if is_sender:
            return Direction.OUTGOING
        if is_receiver:
            return Direction.INCOMING
        return Direction.UNKNOWN


class TransactionPage(BaseModel):
    total: int
    docs: list[TransactionRecord]
    status: bool = True

    @classmethod
    def from_records(cls, records: list[TransactionRecord]) -> "TransactionPage":
        return cls(total=len(records), docs=records)
