"""SQLAlchemy ORM model for the game_history table (migration 005)."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Double, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.pd_common.database import Base


class GameHistoryORM(Base):
    __tablename__ = "game_history"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    bet_amount: Mapped[float] = mapped_column(Double, nullable=False)
    prediction: Mapped[str] = mapped_column(String(4), nullable=False)
    dice_roll: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    result: Mapped[str] = mapped_column(String(4), nullable=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False)
    win_amount: Mapped[float] = mapped_column(Double, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
