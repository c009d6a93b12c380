"""Integration tests for wagers, wallet and stats (requires running PG).

Pre-condition: database migrated with `alembic upgrade head`.

Uses the session-scoped client fixture from tests/integration/conftest.py.
"""

import asyncio
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import text

from src.pd_common.database import async_session_factory

pytestmark = pytest.mark.asyncio(loop_scope="session")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def fund_account(user_id: str, amount: float) -> None:
    """Set a wallet balance directly; there is no deposit endpoint."""
    async with async_session_factory() as session:
        await session.execute(
            text("UPDATE accounts SET balance = :amount WHERE user_id = :user_id"),
            {"amount": amount, "user_id": user_id},
        )
        await session.commit()


async def _register_and_login(client: AsyncClient) -> tuple[str, dict[str, str]]:
    """Register a fresh user; return (user_id, auth headers)."""
    uid = uuid.uuid4().hex[:8]
    user = {
        "username": f"dice_{uid}",
        "email": f"dice_{uid}@example.com",
        "password": "TestPass1",
    }
    reg = await client.post("/api/v1/auth/register", json=user)
    user_id = str(reg.json()["data"]["user_id"])
    resp = await client.post(
        "/api/v1/auth/login",
        json={"username": user["username"], "password": user["password"]},
    )
    token = resp.json()["data"]["access_token"]
    return user_id, {"Authorization": f"Bearer {token}"}


async def _play(client: AsyncClient, headers: dict[str, str], stake: float, prediction: str):  # type: ignore[no-untyped-def]
    return await client.post(
        "/api/v1/game/play",
        json={"betAmount": stake, "prediction": prediction},
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Play
# ---------------------------------------------------------------------------

class TestPlay:
    async def test_zero_balance_rejected(self, client: AsyncClient) -> None:
        _, headers = await _register_and_login(client)
        resp = await _play(client, headers, 10, "odd")
        assert resp.status_code == 422
        assert resp.json()["code"] == 2001

        txs = await client.get("/api/v1/wallet/transactions", headers=headers)
        assert txs.json()["data"]["transactions"] == []

    async def test_balance_arithmetic(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 100)

        resp = await _play(client, headers, 10, "even")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["result"] == ("even" if data["diceRoll"] % 2 == 0 else "odd")
        if data["won"]:
            assert data["winAmount"] == 20
            assert data["newBalance"] == 110
        else:
            assert data["winAmount"] == 0
            assert data["newBalance"] == 90

        bal = await client.get("/api/v1/wallet/balance", headers=headers)
        assert bal.json()["data"]["balance"] == data["newBalance"]

    async def test_ledger_entries_written(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 50)

        data = (await _play(client, headers, 5, "odd")).json()["data"]
        txs = (await client.get("/api/v1/wallet/transactions", headers=headers)).json()["data"]
        kinds = [t["type"] for t in txs["transactions"]]

        if data["won"]:
            assert kinds == ["win", "bet"]
            win = txs["transactions"][0]
            assert win["unlockDate"] is not None
            assert win["description"] == f"Won on odd (dice: {data['diceRoll']})"
        else:
            assert kinds == ["bet"]
        bet = txs["transactions"][-1]
        assert bet["amount"] == 5
        assert bet["unlockDate"] is None
        assert bet["description"] == "Bet on odd"

    async def test_stake_above_balance_leaves_state(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 5)

        resp = await _play(client, headers, 6, "even")
        assert resp.status_code == 422
        assert resp.json()["code"] == 2001

        bal = await client.get("/api/v1/wallet/balance", headers=headers)
        assert bal.json()["data"]["balance"] == 5
        hist = await client.get("/api/v1/game/history", headers=headers)
        assert hist.json()["data"]["history"] == []


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

class TestConcurrentWagers:
    async def test_two_wagers_on_one_stake_settle_once(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 10)

        first, second = await asyncio.gather(
            _play(client, headers, 10, "even"),
            _play(client, headers, 10, "odd"),
        )

        codes = sorted([first.json()["code"], second.json()["code"]])
        assert codes == [0, 2001]

        balance = (await client.get("/api/v1/wallet/balance", headers=headers)).json()["data"]
        assert balance["balance"] in (0, 20)

        txs = (await client.get("/api/v1/wallet/transactions", headers=headers)).json()["data"]
        bets = [t for t in txs["transactions"] if t["type"] == "bet"]
        assert len(bets) == 1
        hist = (await client.get("/api/v1/game/history", headers=headers)).json()["data"]
        assert len(hist["history"]) == 1


# ---------------------------------------------------------------------------
# History, stats, locked balance
# ---------------------------------------------------------------------------

class TestReadViews:
    async def test_stats_match_history(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 100)
        for _ in range(3):
            await _play(client, headers, 2, "even")

        hist = (await client.get("/api/v1/game/history", headers=headers)).json()["data"]
        stats = (await client.get("/api/v1/game/stats", headers=headers)).json()["data"]

        won = sum(1 for h in hist["history"] if h["won"])
        assert stats["totalGames"] == 3
        assert stats["gamesWon"] == won
        assert stats["gamesLost"] == 3 - won
        assert stats["totalBet"] == 6
        assert stats["totalWon"] == won * 4
        assert stats["netProfit"] == won * 4 - 6

    async def test_history_pagination(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 100)
        for _ in range(3):
            await _play(client, headers, 1, "odd")

        first = (
            await client.get("/api/v1/game/history", params={"limit": 2}, headers=headers)
        ).json()["data"]
        assert len(first["history"]) == 2
        assert first["hasMore"] is True

        second = (
            await client.get(
                "/api/v1/game/history",
                params={"limit": 2, "cursor": first["nextCursor"]},
                headers=headers,
            )
        ).json()["data"]
        assert len(second["history"]) == 1
        assert second["hasMore"] is False

    async def test_locked_balance_tracks_wins(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 100)
        data = (await _play(client, headers, 10, "even")).json()["data"]

        locked = (
            await client.get("/api/v1/wallet/locked-balance", headers=headers)
        ).json()["data"]
        assert locked["totalBalance"] == data["newBalance"]
        assert locked["lockedBalance"] == data["winAmount"]
        assert locked["availableBalance"] == data["newBalance"] - data["winAmount"]
        assert len(locked["lockedTransactions"]) == (1 if data["won"] else 0)

    async def test_reads_are_idempotent(self, client: AsyncClient) -> None:
        user_id, headers = await _register_and_login(client)
        await fund_account(user_id, 20)
        await _play(client, headers, 3, "odd")

        a = (await client.get("/api/v1/game/stats", headers=headers)).json()["data"]
        b = (await client.get("/api/v1/game/stats", headers=headers)).json()["data"]
        assert a == b
