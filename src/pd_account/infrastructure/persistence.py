"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Balance mutations are atomic PostgreSQL UPDATE ... RETURNING statements.
A debit that returns 0 rows means the balance could not cover the amount.

Transaction ownership: the CALLER (application service) is responsible for
committing or rolling back. ``lock_account`` takes a row lock that is held
until then, which serializes concurrent settlements for one account.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.domain.lock_window import WIN_LOCK_PERIOD
from src.pd_account.domain.models import Account, LedgerEntry
from src.pd_common.enums import TransactionStatus, TransactionType
from src.pd_common.errors import AccountNotFoundError, InsufficientBalanceError, InternalError

_ACCOUNT_COLUMNS = "id, user_id, balance, locked_balance, version, created_at, updated_at"
_ENTRY_COLUMNS = (
    "id, user_id, entry_type, amount, balance_after, status, unlock_at, description, created_at"
)

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE user_id = :user_id
""")

_LOCK_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE user_id = :user_id
    FOR UPDATE
""")

_CREATE_ACCOUNT_SQL = text(f"""
    INSERT INTO accounts (user_id, balance, locked_balance, version)
    VALUES (:user_id, 0, 0, 0)
    RETURNING {_ACCOUNT_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE accounts
    SET balance = balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE user_id = :user_id AND balance >= :amount
    RETURNING {_ACCOUNT_COLUMNS}
""")

_CREDIT_SQL = text(f"""
    UPDATE accounts
    SET balance = balance + :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE user_id = :user_id
    RETURNING {_ACCOUNT_COLUMNS}
""")

_INSERT_ENTRY_SQL = text(f"""
    INSERT INTO transactions
        (user_id, entry_type, amount, balance_after, status,
         unlock_at, description, created_at)
    VALUES
        (:user_id, :entry_type, :amount, :balance_after, :status,
         :unlock_at, :description, COALESCE(:created_at, NOW()))
    RETURNING {_ENTRY_COLUMNS}
""")

_LIST_ENTRIES_SQL = text(f"""
    SELECT {_ENTRY_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id
      AND (:cursor_id IS NULL OR id < :cursor_id)
      AND (:entry_type IS NULL OR entry_type = :entry_type)
    ORDER BY id DESC
    LIMIT :limit
""")

_LIST_RECENT_WINS_SQL = text(f"""
    SELECT {_ENTRY_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id
      AND entry_type = :entry_type
      AND created_at > :since
      AND unlock_at > :now
    ORDER BY id DESC
""")


def _row_to_account(row: object) -> Account:
    return Account(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        balance=float(row.balance),  # type: ignore[attr-defined]
        locked_balance=float(row.locked_balance),  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_entry(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=float(row.amount),  # type: ignore[attr-defined]
        balance_after=float(row.balance_after),  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        unlock_at=row.unlock_at,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository: all mutations atomic at the SQL level."""

    async def get_account_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> Account | None:
        result = await db.execute(_GET_ACCOUNT_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def create_account(self, db: AsyncSession, user_id: str) -> Account:
        result = await db.execute(_CREATE_ACCOUNT_SQL, {"user_id": user_id})
        row = result.fetchone()
        if row is None:
            raise InternalError("Account insert returned no rows: this should never happen")
        return _row_to_account(row)

    async def lock_account(
        self, db: AsyncSession, user_id: str
    ) -> Account | None:
        result = await db.execute(_LOCK_ACCOUNT_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def debit(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> Account:
        result = await db.execute(_DEBIT_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        if row is None:
            account = await self.get_account_by_user_id(db, user_id)
            if account is None:
                raise AccountNotFoundError(user_id)
            raise InsufficientBalanceError(amount, account.balance)
        return _row_to_account(row)

    async def credit(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> Account:
        result = await db.execute(_CREDIT_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        if row is None:
            raise AccountNotFoundError(user_id)
        return _row_to_account(row)

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
    ) -> LedgerEntry:
        result = await db.execute(
            _INSERT_ENTRY_SQL,
            {
                "user_id": user_id,
                "entry_type": entry_type,
                "amount": amount,
                "balance_after": balance_after,
                "status": TransactionStatus.COMPLETED.value,
                "unlock_at": unlock_at,
                "description": description,
                "created_at": created_at,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows: this should never happen")
        return _row_to_entry(row)

    async def list_entries(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_ENTRIES_SQL,
            {
                "user_id": user_id,
                "cursor_id": cursor_id,
                "entry_type": entry_type,
                "limit": limit,
            },
        )
        return [_row_to_entry(row) for row in result.fetchall()]

    async def list_recent_wins(
        self, db: AsyncSession, user_id: str, now: datetime
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_RECENT_WINS_SQL,
            {
                "user_id": user_id,
                "entry_type": TransactionType.WIN.value,
                "since": now - WIN_LOCK_PERIOD,
                "now": now,
            },
        )
        return [_row_to_entry(row) for row in result.fetchall()]
