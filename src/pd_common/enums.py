"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class Parity(str, Enum):
    """Die parity; doubles as the player's prediction."""
    ODD = "odd"
    EVEN = "even"


class TransactionType(str, Enum):
    # Reserved: the wallet has no deposit/withdraw flow yet
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    LOSS = "loss"
    # Written by game settlement
    BET = "bet"
    WIN = "win"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
