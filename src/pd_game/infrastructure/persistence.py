"""GameRepository: append and read game_history rows.

Inserts run inside the settlement transaction owned by the caller.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_common.errors import InternalError
from src.pd_game.domain.models import GameRecord

_RECORD_COLUMNS = (
    "id, user_id, bet_amount, prediction, dice_roll, result, won, win_amount, created_at"
)

_INSERT_RECORD_SQL = text(f"""
    INSERT INTO game_history
        (user_id, bet_amount, prediction, dice_roll, result, won, win_amount, created_at)
    VALUES
        (:user_id, :bet_amount, :prediction, :dice_roll, :result, :won, :win_amount,
         COALESCE(:created_at, NOW()))
    RETURNING {_RECORD_COLUMNS}
""")

_LIST_RECORDS_SQL = text(f"""
    SELECT {_RECORD_COLUMNS}
    FROM game_history
    WHERE user_id = :user_id
      AND (:cursor_id IS NULL OR id < :cursor_id)
    ORDER BY id DESC
    LIMIT :limit
""")

_LIST_ALL_RECORDS_SQL = text(f"""
    SELECT {_RECORD_COLUMNS}
    FROM game_history
    WHERE user_id = :user_id
""")


def _row_to_record(row: object) -> GameRecord:
    return GameRecord(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        bet_amount=float(row.bet_amount),  # type: ignore[attr-defined]
        prediction=row.prediction,  # type: ignore[attr-defined]
        dice_roll=row.dice_roll,  # type: ignore[attr-defined]
        result=row.result,  # type: ignore[attr-defined]
        won=row.won,  # type: ignore[attr-defined]
        win_amount=float(row.win_amount),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class GameRepository:
    async def insert_record(
        self,
        db: AsyncSession,
        user_id: str,
        bet_amount: float,
        prediction: str,
        dice_roll: int,
        result: str,
        won: bool,
        win_amount: float,
        created_at: datetime | None = None,
    ) -> GameRecord:
        res = await db.execute(
            _INSERT_RECORD_SQL,
            {
                "user_id": user_id,
                "bet_amount": bet_amount,
                "prediction": prediction,
                "dice_roll": dice_roll,
                "result": result,
                "won": won,
                "win_amount": win_amount,
                "created_at": created_at,
            },
        )
        row = res.fetchone()
        if row is None:
            raise InternalError("Game history insert returned no rows: this should never happen")
        return _row_to_record(row)

    async def list_records(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[GameRecord]:
        res = await db.execute(
            _LIST_RECORDS_SQL,
            {"user_id": user_id, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_record(row) for row in res.fetchall()]

    async def list_all_records(
        self, db: AsyncSession, user_id: str
    ) -> list[GameRecord]:
        res = await db.execute(_LIST_ALL_RECORDS_SQL, {"user_id": user_id})
        return [_row_to_record(row) for row in res.fetchall()]
