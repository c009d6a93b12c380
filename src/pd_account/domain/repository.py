"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.domain.models import Account, LedgerEntry


class AccountRepositoryProtocol(Protocol):
    async def get_account_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Account | None: ...

    async def create_account(
        self, db: AsyncSession, user_id: str
    ) -> Account: ...

    async def lock_account(
        self, db: AsyncSession, user_id: str
    ) -> Account | None: ...

    async def debit(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> Account: ...

    async def credit(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> Account: ...

    async def append_entry(
        self,
        db: AsyncSession,
        user_id: str,
        entry_type: str,
        amount: float,
        balance_after: float,
        description: str,
        unlock_at: datetime | None = None,
        created_at: datetime | None = None,
    ) -> LedgerEntry: ...

    async def list_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]: ...

    async def list_recent_wins(
        self, db: AsyncSession, user_id: str, now: datetime
    ) -> list[LedgerEntry]: ...
