"""Domain models for pd_game: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Roll:
    dice_roll: int    # 1..6
    result: str       # Parity value derived from dice_roll


@dataclass(frozen=True)
class Outcome:
    dice_roll: int
    result: str
    won: bool
    win_amount: float  # stake * 2 when won, else 0


@dataclass
class GameRecord:
    id: int
    user_id: str
    bet_amount: float
    prediction: str
    dice_roll: int
    result: str
    won: bool
    win_amount: float = 0.0
    created_at: datetime | None = None


@dataclass(frozen=True)
class GameStats:
    total_games: int
    games_won: int
    games_lost: int
    win_rate: float
    total_bet: float
    total_won: float
    net_profit: float
