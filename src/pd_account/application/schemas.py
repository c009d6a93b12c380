"""Pydantic response schemas for the wallet API (camelCase on the wire)."""

from datetime import datetime

from src.pd_account.domain.models import LedgerEntry, LockedBalance
from src.pd_common.money import money_to_display
from src.pd_common.response import CamelModel


class BalanceResponse(CamelModel):
    balance: float
    locked_balance: float
    available_balance: float
    balance_display: str
    available_balance_display: str

    @classmethod
    def from_account(cls, balance: float, locked_balance: float) -> "BalanceResponse":
        # availableBalance mirrors the nominal balance: the stored locked column
        # is informational and bets are only ever checked against the balance.
        return cls(
            balance=balance,
            locked_balance=locked_balance,
            available_balance=balance,
            balance_display=money_to_display(balance),
            available_balance_display=money_to_display(balance),
        )


class TransactionItem(CamelModel):
    id: int
    type: str
    amount: float
    balance_after: float
    status: str
    description: str | None
    unlock_date: datetime | None
    created_at: datetime | None

    @classmethod
    def from_entry(cls, entry: LedgerEntry) -> "TransactionItem":
        return cls(
            id=entry.id,
            type=entry.entry_type,
            amount=entry.amount,
            balance_after=entry.balance_after,
            status=entry.status,
            description=entry.description,
            unlock_date=entry.unlock_at,
            created_at=entry.created_at,
        )


class TransactionsResponse(CamelModel):
    transactions: list[TransactionItem]
    next_cursor: str | None
    has_more: bool


class LockedTransactionItem(CamelModel):
    amount: float
    unlock_date: datetime | None
    created_at: datetime | None


class LockedBalanceResponse(CamelModel):
    locked_balance: float
    available_balance: float
    total_balance: float
    locked_transactions: list[LockedTransactionItem]

    @classmethod
    def from_domain(cls, result: LockedBalance) -> "LockedBalanceResponse":
        return cls(
            locked_balance=result.locked,
            available_balance=result.available,
            total_balance=result.total,
            locked_transactions=[
                LockedTransactionItem(
                    amount=e.amount, unlock_date=e.unlock_at, created_at=e.created_at
                )
                for e in result.entries
            ],
        )
