"""Pydantic request/response schemas for the game API.

Field names are snake_case in Python and camelCase on the wire
(``betAmount``, ``diceRoll``, ``winAmount``, ``newBalance`` ...).
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from src.pd_common.money import format_amount
from src.pd_common.response import CamelModel
from src.pd_game.domain.models import GameRecord, GameStats, Outcome, Roll


class PlayRequest(CamelModel):
    # Range and value checks live in validate_wager so the service enforces
    # them for every caller, not just HTTP.
    bet_amount: float = Field(..., description="Stake, at least 1")
    prediction: str = Field(..., description="'odd' or 'even'")


class PlayResponse(CamelModel):
    dice_roll: int
    result: str
    won: bool
    win_amount: float
    new_balance: float
    message: str

    @classmethod
    def from_outcome(cls, outcome: Outcome, new_balance: float) -> "PlayResponse":
        if outcome.won:
            message = (
                f"Congratulations! You won ${format_amount(outcome.win_amount)}! "
                "(Unlocks in 24 hours)"
            )
        else:
            message = (
                f"Sorry, you lost. The dice showed {outcome.dice_roll} ({outcome.result})"
            )
        return cls(
            dice_roll=outcome.dice_roll,
            result=outcome.result,
            won=outcome.won,
            win_amount=outcome.win_amount,
            new_balance=new_balance,
            message=message,
        )


class WatchResponse(CamelModel):
    dice_roll: int
    result: str
    mode: Literal["watch"] = "watch"
    message: str

    @classmethod
    def from_roll(cls, drawn: Roll) -> "WatchResponse":
        return cls(
            dice_roll=drawn.dice_roll,
            result=drawn.result,
            message=(
                f"Dice rolled {drawn.dice_roll} ({drawn.result}). "
                "Login and deposit to play for real!"
            ),
        )


class GameHistoryItem(CamelModel):
    id: int
    bet_amount: float
    prediction: str
    dice_roll: int
    result: str
    won: bool
    win_amount: float
    created_at: datetime | None

    @classmethod
    def from_record(cls, record: GameRecord) -> "GameHistoryItem":
        return cls(
            id=record.id,
            bet_amount=record.bet_amount,
            prediction=record.prediction,
            dice_roll=record.dice_roll,
            result=record.result,
            won=record.won,
            win_amount=record.win_amount,
            created_at=record.created_at,
        )


class GameHistoryResponse(CamelModel):
    history: list[GameHistoryItem]
    next_cursor: str | None
    has_more: bool


class StatsResponse(CamelModel):
    total_games: int
    games_won: int
    games_lost: int
    win_rate: float
    total_bet: float
    total_won: float
    net_profit: float

    @classmethod
    def from_stats(cls, stats: GameStats) -> "StatsResponse":
        return cls(
            total_games=stats.total_games,
            games_won=stats.games_won,
            games_lost=stats.games_lost,
            win_rate=stats.win_rate,
            total_bet=stats.total_bet,
            total_won=stats.total_won,
            net_profit=stats.net_profit,
        )
