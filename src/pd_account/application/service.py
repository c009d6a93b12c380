"""AccountApplicationService: wallet reads.

Balance, transaction listing and the lock window are read-only and run
without an explicit transaction. Balance mutations happen only inside
game settlement (pd_game), which owns its own transaction.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.application.schemas import (
    BalanceResponse,
    LockedBalanceResponse,
    TransactionItem,
    TransactionsResponse,
)
from src.pd_account.domain.lock_window import locked_balance
from src.pd_account.domain.models import Account
from src.pd_account.domain.repository import AccountRepositoryProtocol
from src.pd_account.infrastructure.persistence import AccountRepository
from src.pd_common.datetime_utils import utc_now
from src.pd_common.errors import AccountNotFoundError
from src.pd_common.pagination import cursor_decode, cursor_encode


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def _require_account(self, db: AsyncSession, user_id: str) -> Account:
        account = await self._repo.get_account_by_user_id(db, user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        account = await self._require_account(db, user_id)
        return BalanceResponse.from_account(account.balance, account.locked_balance)

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None,
        limit: int,
        entry_type: str | None,
    ) -> TransactionsResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_entries(
            db, user_id, cursor_id, limit + 1, entry_type
        )
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return TransactionsResponse(
            transactions=[TransactionItem.from_entry(e) for e in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def get_locked_balance(
        self, db: AsyncSession, user_id: str, now: datetime | None = None
    ) -> LockedBalanceResponse:
        now = now or utc_now()
        wins = await self._repo.list_recent_wins(db, user_id, now)
        account = await self._require_account(db, user_id)
        return LockedBalanceResponse.from_domain(
            locked_balance(wins, account.balance, now)
        )
