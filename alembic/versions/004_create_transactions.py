"""004: create transactions table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id              BIGSERIAL        PRIMARY KEY,
            user_id         VARCHAR(64)      NOT NULL,
            entry_type      VARCHAR(20)      NOT NULL,
            amount          DOUBLE PRECISION NOT NULL,
            balance_after   DOUBLE PRECISION NOT NULL,
            status          VARCHAR(20)      NOT NULL DEFAULT 'completed',
            unlock_at       TIMESTAMPTZ,
            description     VARCHAR(255),
            created_at      TIMESTAMPTZ      NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_transactions_type CHECK (
                entry_type IN ('deposit', 'withdrawal', 'win', 'loss', 'bet')
            ),
            CONSTRAINT ck_transactions_status CHECK (
                status IN ('pending', 'completed', 'failed')
            ),
            CONSTRAINT ck_transactions_amount_gt_0 CHECK (amount > 0),
            CONSTRAINT ck_transactions_balance_gte_0 CHECK (balance_after >= 0),
            CONSTRAINT ck_transactions_bet_unlocked CHECK (
                entry_type <> 'bet' OR unlock_at IS NULL
            )
        );
    """)
    op.execute("CREATE INDEX idx_transactions_user_id ON transactions (user_id, id DESC);")
    op.execute("""
        CREATE INDEX idx_transactions_user_wins
        ON transactions (user_id, created_at)
        WHERE entry_type = 'win';
    """)
    op.execute("COMMENT ON TABLE transactions IS 'Wallet ledger: append-only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions CASCADE;")
