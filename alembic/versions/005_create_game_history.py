"""005: create game_history table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE game_history (
            id              BIGSERIAL        PRIMARY KEY,
            user_id         VARCHAR(64)      NOT NULL,
            bet_amount      DOUBLE PRECISION NOT NULL,
            prediction      VARCHAR(4)       NOT NULL,
            dice_roll       SMALLINT         NOT NULL,
            result          VARCHAR(4)       NOT NULL,
            won             BOOLEAN          NOT NULL,
            win_amount      DOUBLE PRECISION NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ      NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_game_prediction CHECK (prediction IN ('odd', 'even')),
            CONSTRAINT ck_game_result CHECK (result IN ('odd', 'even')),
            CONSTRAINT ck_game_dice_roll CHECK (dice_roll BETWEEN 1 AND 6),
            CONSTRAINT ck_game_bet_gte_1 CHECK (bet_amount >= 1),
            CONSTRAINT ck_game_payout CHECK (
                (won AND win_amount = bet_amount * 2) OR (NOT won AND win_amount = 0)
            )
        );
    """)
    op.execute("CREATE INDEX idx_game_history_user_id ON game_history (user_id, id DESC);")
    op.execute("COMMENT ON TABLE game_history IS 'One row per settled wager: append-only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS game_history CASCADE;")
