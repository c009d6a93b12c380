"""Domain models for pd_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Account:
    id: str
    user_id: str
    balance: float           # nominal, authoritative
    locked_balance: float    # stored column, informational only
    version: int
    created_at: datetime
    updated_at: datetime


@dataclass
class LedgerEntry:
    id: int                          # BIGSERIAL
    user_id: str
    entry_type: str                  # TransactionType value
    amount: float                    # always positive; direction implied by entry_type
    balance_after: float             # nominal balance snapshot after the op
    status: str = "completed"
    unlock_at: datetime | None = None
    description: str | None = None
    created_at: datetime | None = None


@dataclass
class LockedBalance:
    locked: float
    available: float
    total: float
    entries: list[LedgerEntry] = field(default_factory=list)
