"""Lock window: winnings stay marked as locked for 24 hours after a win.

The lock is informational. Bets are checked against the nominal balance
only, so ``available`` here is a display figure, not a spending limit.
"""

from datetime import datetime, timedelta

from src.pd_account.domain.models import LedgerEntry, LockedBalance
from src.pd_common.datetime_utils import ensure_utc
from src.pd_common.enums import TransactionType

WIN_LOCK_PERIOD = timedelta(hours=24)


def unlock_time(created_at: datetime) -> datetime:
    """Unlock timestamp for a win recorded at ``created_at``."""
    return created_at + WIN_LOCK_PERIOD


def is_locked(entry: LedgerEntry, now: datetime) -> bool:
    """A win is locked while it is younger than 24h and its unlock time is ahead."""
    if entry.entry_type != TransactionType.WIN or entry.unlock_at is None:
        return False
    if entry.created_at is None:
        return False
    now = ensure_utc(now)
    recent = ensure_utc(entry.created_at) > now - WIN_LOCK_PERIOD
    return recent and ensure_utc(entry.unlock_at) > now


def locked_balance(
    entries: list[LedgerEntry], balance: float, now: datetime
) -> LockedBalance:
    locked_entries = [e for e in entries if is_locked(e, now)]
    locked = sum(e.amount for e in locked_entries)
    return LockedBalance(
        locked=locked,
        available=balance - locked,
        total=balance,
        entries=locked_entries,
    )
