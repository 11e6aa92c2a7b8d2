"""Unit tests for AccountRepository using MagicMock AsyncSession."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.sb_account.infrastructure.persistence import AccountRepository
from src.sb_common.enums import TransactionKind
from src.sb_common.money import Money


def _account_row(usd: int = 10000, btc: int = 0) -> MagicMock:
    row = MagicMock()
    row.user_id = "user-1"
    row.balance_usd = usd
    row.balance_btc = btc
    row.version = 3
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _txn_row(txn_id: int = 1, usd: int = -5000, btc: int = 0) -> MagicMock:
    row = MagicMock()
    row.id = txn_id
    row.user_id = "user-1"
    row.kind = "bet_stake"
    row.amount_usd = usd
    row.amount_btc = btc
    row.bet_id = None
    row.note = "Stake on single bet"
    row.created_at = datetime.now(UTC)
    return row


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


def _returning(db: MagicMock, row: object) -> None:
    result = MagicMock()
    result.fetchone.return_value = row
    db.execute = AsyncMock(return_value=result)


class TestApplyDelta:
    async def test_usd_delta_targets_usd_column(self, db: MagicMock) -> None:
        _returning(db, _account_row(usd=5000))

        account = await AccountRepository().apply_delta(db, "user-1", Money.usd(-5000))

        assert account is not None
        assert account.balance_usd == 5000
        sql, params = db.execute.await_args.args
        assert "balance_usd = balance_usd + :delta" in str(sql)
        assert "balance_usd + :delta >= 0" in str(sql)
        assert params == {"user_id": "user-1", "delta": -5000}

    async def test_btc_delta_targets_btc_column(self, db: MagicMock) -> None:
        _returning(db, _account_row(btc=10))

        await AccountRepository().apply_delta(db, "user-1", Money.btc(10))

        assert "balance_btc = balance_btc + :delta" in str(db.execute.await_args.args[0])

    async def test_guard_failure_returns_none(self, db: MagicMock) -> None:
        _returning(db, None)
        assert await AccountRepository().apply_delta(db, "user-1", Money.usd(-1)) is None


class TestTransactions:
    async def test_insert_uses_storage_columns(self, db: MagicMock) -> None:
        _returning(db, _txn_row(7, usd=0, btc=-250))

        txn = await AccountRepository().insert_transaction(
            db, "user-1", TransactionKind.BET_STAKE, Money.btc(-250), "stake", bet_id="bet-1"
        )

        params = db.execute.await_args.args[1]
        assert params["amount_usd"] == 0
        assert params["amount_btc"] == -250
        assert params["kind"] == "bet_stake"
        assert params["bet_id"] == "bet-1"
        assert txn.id == 7
        assert txn.amount == Money.btc(-250)

    async def test_list_passes_cursor_and_kind(self, db: MagicMock) -> None:
        result = MagicMock()
        result.fetchall.return_value = [_txn_row(3), _txn_row(2)]
        db.execute = AsyncMock(return_value=result)

        txns = await AccountRepository().list_transactions(db, "user-1", 4, 21, "bet_stake")

        assert [t.id for t in txns] == [3, 2]
        params = db.execute.await_args.args[1]
        assert params == {"user_id": "user-1", "cursor_id": 4, "kind": "bet_stake", "limit": 21}


class TestSearchByEmail:
    async def test_maps_profiles(self, db: MagicMock) -> None:
        row = MagicMock()
        row.user_id = "7f1c0000-0000-0000-0000-000000000000"
        row.email = "a@example.com"
        row.display_name = "Ann"
        row.balance_usd = 100
        row.balance_btc = 0
        result = MagicMock()
        result.fetchall.return_value = [row]
        db.execute = AsyncMock(return_value=result)

        profiles = await AccountRepository().search_by_email(db, "  A@Example.com ")

        assert profiles[0].email == "a@example.com"
        assert db.execute.await_args.args[1] == {"email": "a@example.com"}
