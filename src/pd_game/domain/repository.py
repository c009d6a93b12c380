"""Repository Protocol for game history."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_game.domain.models import GameRecord


class GameRepositoryProtocol(Protocol):
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
    ) -> GameRecord: ...

    async def list_records(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[GameRecord]: ...

    async def list_all_records(
        self, db: AsyncSession, user_id: str
    ) -> list[GameRecord]: ...
