"""GameApplicationService: wager settlement, watch mode, history, stats.

play_wager is the only balance-mutating path in the system. Everything it
writes (debit, bet entry, credit, win entry, game record) happens in one
database transaction that starts with a row lock on the account, so
concurrent wagers for the same user are serialized and a failure leaves
no partial state behind.
"""

import logging
import random

from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.domain.lock_window import unlock_time
from src.pd_account.domain.models import Account
from src.pd_account.domain.repository import AccountRepositoryProtocol
from src.pd_account.infrastructure.persistence import AccountRepository
from src.pd_common.datetime_utils import utc_now
from src.pd_common.enums import Parity, TransactionType
from src.pd_common.errors import (
    AccountNotFoundError,
    AppError,
    InsufficientBalanceError,
    SettlementFailedError,
)
from src.pd_common.pagination import cursor_decode, cursor_encode
from src.pd_game.application.schemas import (
    GameHistoryItem,
    GameHistoryResponse,
    PlayResponse,
    StatsResponse,
    WatchResponse,
)
from src.pd_game.domain.engine import roll, settle, validate_wager
from src.pd_game.domain.models import Outcome
from src.pd_game.domain.repository import GameRepositoryProtocol
from src.pd_game.domain.stats import aggregate
from src.pd_game.infrastructure.persistence import GameRepository

logger = logging.getLogger(__name__)


class GameApplicationService:
    def __init__(
        self,
        account_repo: AccountRepositoryProtocol | None = None,
        game_repo: GameRepositoryProtocol | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._games: GameRepositoryProtocol = game_repo or GameRepository()
        self._rng = rng

    async def play_wager(
        self, db: AsyncSession, user_id: str, stake: float, prediction: str
    ) -> PlayResponse:
        predicted = validate_wager(stake, prediction)
        try:
            outcome, account = await self._settle(db, user_id, stake, predicted)
            await db.commit()
        except AppError:
            await db.rollback()
            raise
        except Exception as exc:
            await db.rollback()
            logger.exception("Settlement failed: user=%s stake=%s", user_id, stake)
            raise SettlementFailedError() from exc

        logger.info(
            "Wager settled: user=%s stake=%s prediction=%s roll=%d won=%s balance=%s",
            user_id,
            stake,
            predicted.value,
            outcome.dice_roll,
            outcome.won,
            account.balance,
        )
        return PlayResponse.from_outcome(outcome, account.balance)

    async def _settle(
        self, db: AsyncSession, user_id: str, stake: float, predicted: Parity
    ) -> tuple[Outcome, Account]:
        account = await self._accounts.lock_account(db, user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        # Nominal balance only: winnings inside the lock window stay spendable
        if account.balance < stake:
            raise InsufficientBalanceError(stake, account.balance)

        now = utc_now()
        account = await self._accounts.debit(db, user_id, stake)
        await self._accounts.append_entry(
            db,
            user_id,
            TransactionType.BET.value,
            stake,
            account.balance,
            f"Bet on {predicted.value}",
            created_at=now,
        )

        outcome = settle(stake, predicted.value, self._rng)

        if outcome.won:
            account = await self._accounts.credit(db, user_id, outcome.win_amount)
            await self._accounts.append_entry(
                db,
                user_id,
                TransactionType.WIN.value,
                outcome.win_amount,
                account.balance,
                f"Won on {predicted.value} (dice: {outcome.dice_roll})",
                unlock_at=unlock_time(now),
                created_at=now,
            )

        await self._games.insert_record(
            db,
            user_id,
            bet_amount=stake,
            prediction=predicted.value,
            dice_roll=outcome.dice_roll,
            result=outcome.result,
            won=outcome.won,
            win_amount=outcome.win_amount,
            created_at=now,
        )
        return outcome, account

    def watch(self) -> WatchResponse:
        return WatchResponse.from_roll(roll(self._rng))

    async def history(
        self,
        db: AsyncSession,
        user_id: str,
        cursor: str | None,
        limit: int,
    ) -> GameHistoryResponse:
        cursor_id = cursor_decode(cursor)
        records = await self._games.list_records(db, user_id, cursor_id, limit + 1)
        has_more = len(records) > limit
        page = records[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return GameHistoryResponse(
            history=[GameHistoryItem.from_record(r) for r in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def stats(self, db: AsyncSession, user_id: str) -> StatsResponse:
        records = await self._games.list_all_records(db, user_id)
        return StatsResponse.from_stats(aggregate(records))
