"""Wager engine: one uniform draw from 1..6 decides an odd/even bet.

Everything here is pure apart from the random source, which callers may
inject (tests pass a seeded ``random.Random``).
"""

import random

from src.pd_common.enums import Parity
from src.pd_common.errors import InvalidWagerError
from src.pd_game.domain.models import Outcome, Roll

DIE_FACES = 6
MIN_STAKE = 1
PAYOUT_MULTIPLIER = 2

_system_random = random.SystemRandom()


def parity_of(dice_roll: int) -> Parity:
    return Parity.EVEN if dice_roll % 2 == 0 else Parity.ODD


def validate_wager(stake: float, prediction: str) -> Parity:
    """Check a wager before any state is touched; returns the parsed prediction."""
    if isinstance(stake, bool) or not isinstance(stake, (int, float)):
        raise InvalidWagerError("Bet amount must be a number")
    if not stake >= MIN_STAKE:
        raise InvalidWagerError(f"Bet amount must be at least ${MIN_STAKE}")
    try:
        return Parity(prediction)
    except ValueError:
        raise InvalidWagerError("Prediction must be odd or even") from None


def roll(rng: random.Random | None = None) -> Roll:
    """Free draw with no stake, used by watch mode."""
    dice_roll = (rng or _system_random).randint(1, DIE_FACES)
    return Roll(dice_roll=dice_roll, result=parity_of(dice_roll).value)


def settle(
    stake: float, prediction: str, rng: random.Random | None = None
) -> Outcome:
    """Draw once and score the wager. Stake is taken at face value, unrounded."""
    predicted = validate_wager(stake, prediction)
    drawn = roll(rng)
    won = drawn.result == predicted.value
    return Outcome(
        dice_roll=drawn.dice_roll,
        result=drawn.result,
        won=won,
        win_amount=stake * PAYOUT_MULTIPLIER if won else 0.0,
    )
