"""Tests for request/response schemas, enums and cursor utilities."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.pd_account.application.schemas import BalanceResponse, TransactionItem
from src.pd_account.domain.models import LedgerEntry
from src.pd_common.enums import Parity, TransactionStatus, TransactionType
from src.pd_game.application.schemas import PlayRequest
from src.pd_gateway.user.schemas import RegisterRequest


class TestRegisterRequest:
    def test_valid_input(self) -> None:
        req = RegisterRequest(username="alice", email="alice@example.com", password="secret1")
        assert req.username == "alice"

    def test_username_too_short(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="ab", email="a@b.com", password="secret1")

    def test_username_invalid_chars(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice!", email="a@b.com", password="secret1")

    def test_invalid_email(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", email="not-an-email", password="secret1")

    def test_password_too_short(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", email="a@b.com", password="abc")


class TestPlayRequest:
    def test_accepts_camel_case(self) -> None:
        req = PlayRequest.model_validate({"betAmount": 12.5, "prediction": "odd"})
        assert req.bet_amount == 12.5
        assert req.prediction == "odd"

    def test_missing_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlayRequest.model_validate({"prediction": "odd"})


class TestWalletSchemas:
    def test_balance_display(self) -> None:
        wire = BalanceResponse.from_account(1500.0, 0.0).to_wire()
        assert wire["balanceDisplay"] == "$1,500.00"
        assert wire["availableBalance"] == 1500.0
        assert wire["lockedBalance"] == 0.0

    def test_transaction_item_wire_names(self) -> None:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        entry = LedgerEntry(
            id=7,
            user_id="u1",
            entry_type="win",
            amount=20.0,
            balance_after=110.0,
            unlock_at=created,
            description="Won on even (dice: 4)",
            created_at=created,
        )
        wire = TransactionItem.from_entry(entry).to_wire()
        assert wire["type"] == "win"
        assert wire["balanceAfter"] == 110.0
        assert wire["status"] == "completed"
        assert wire["unlockDate"] is not None


class TestEnums:
    def test_parity_values(self) -> None:
        assert {p.value for p in Parity} == {"odd", "even"}

    def test_transaction_kinds_match_db_check(self) -> None:
        assert {t.value for t in TransactionType} == {
            "deposit",
            "withdrawal",
            "win",
            "loss",
            "bet",
        }

    def test_status_is_str(self) -> None:
        assert TransactionStatus.COMPLETED == "completed"
