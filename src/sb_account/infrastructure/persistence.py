"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Balance changes are one conditional `UPDATE ... RETURNING` each. The UPDATE
row-locks the account, so concurrent placements for one user serialize and
the WHERE guard is re-checked against the committed balance. Zero rows back
means the guard failed (or the account is missing).

Transaction ownership: the CALLER commits or rolls back.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.domain.models import Account, AccountProfile, Transaction
from src.sb_common.enums import Currency, TransactionKind
from src.sb_common.errors import InternalError
from src.sb_common.money import Money

_ACCOUNT_COLUMNS = "user_id, balance_usd, balance_btc, version, created_at, updated_at"
_BALANCE_COLUMN: dict[Currency, str] = {
    Currency.USD: "balance_usd",
    Currency.BTC: "balance_btc",
}

# ---------------------------------------------------------------------------
# SQL: accounts
# ---------------------------------------------------------------------------

_APPLY_DELTA_SQL = {
    currency: text(f"""
        UPDATE accounts
        SET {column} = {column} + :delta,
            version = version + 1,
            updated_at = NOW()
        WHERE user_id = :user_id AND {column} + :delta >= 0
        RETURNING {_ACCOUNT_COLUMNS}
    """)
    for currency, column in _BALANCE_COLUMN.items()
}

_GET_ACCOUNT_SQL = text(f"""
    SELECT {_ACCOUNT_COLUMNS}
    FROM accounts
    WHERE user_id = :user_id
""")

_SEARCH_BY_EMAIL_SQL = text("""
    SELECT u.id AS user_id, u.email, u.display_name, a.balance_usd, a.balance_btc
    FROM users u
    JOIN accounts a ON a.user_id = CAST(u.id AS TEXT)
    WHERE u.email = :email
""")

# ---------------------------------------------------------------------------
# SQL: transactions (append-only)
# ---------------------------------------------------------------------------

_TRANSACTION_COLUMNS = "id, user_id, kind, amount_usd, amount_btc, bet_id, note, created_at"

_INSERT_TRANSACTION_SQL = text(f"""
    INSERT INTO transactions (user_id, kind, amount_usd, amount_btc, bet_id, note)
    VALUES (:user_id, :kind, :amount_usd, :amount_btc, :bet_id, :note)
    RETURNING {_TRANSACTION_COLUMNS}
""")

_LIST_TRANSACTIONS_SQL = text(f"""
    SELECT {_TRANSACTION_COLUMNS}
    FROM transactions
    WHERE user_id = :user_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < :cursor_id)
      AND (CAST(:kind AS TEXT) IS NULL OR kind = :kind)
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_account(row: Any) -> Account:
    return Account(
        user_id=row.user_id,
        balance_usd=row.balance_usd,
        balance_btc=row.balance_btc,
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_to_transaction(row: Any) -> Transaction:
    return Transaction(
        id=row.id,
        user_id=row.user_id,
        kind=row.kind,
        amount_usd=row.amount_usd,
        amount_btc=row.amount_btc,
        bet_id=str(row.bet_id) if row.bet_id is not None else None,
        note=row.note,
        created_at=row.created_at,
    )


class AccountRepository:
    async def get_account(self, db: AsyncSession, user_id: str) -> Account | None:
        row = (await db.execute(_GET_ACCOUNT_SQL, {"user_id": user_id})).fetchone()
        return _row_to_account(row) if row else None

    async def apply_delta(
        self, db: AsyncSession, user_id: str, delta: Money
    ) -> Account | None:
        """Add a signed amount to one balance. None if it would go negative or no account."""
        result = await db.execute(
            _APPLY_DELTA_SQL[delta.currency], {"user_id": user_id, "delta": delta.amount}
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def insert_transaction(
        self,
        db: AsyncSession,
        user_id: str,
        kind: TransactionKind,
        amount: Money,
        note: str,
        bet_id: str | None = None,
    ) -> Transaction:
        amount_usd, amount_btc = amount.to_columns()
        result = await db.execute(
            _INSERT_TRANSACTION_SQL,
            {
                "user_id": user_id,
                "kind": kind.value,
                "amount_usd": amount_usd,
                "amount_btc": amount_btc,
                "bet_id": bet_id,
                "note": note,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows")
        return _row_to_transaction(row)

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        kind: str | None,
    ) -> list[Transaction]:
        result = await db.execute(
            _LIST_TRANSACTIONS_SQL,
            {"user_id": user_id, "cursor_id": cursor_id, "kind": kind, "limit": limit},
        )
        return [_row_to_transaction(row) for row in result.fetchall()]

    async def search_by_email(self, db: AsyncSession, email: str) -> list[AccountProfile]:
        result = await db.execute(_SEARCH_BY_EMAIL_SQL, {"email": email.strip().lower()})
        return [
            AccountProfile(
                user_id=str(row.user_id),
                email=row.email,
                display_name=row.display_name,
                balance_usd=row.balance_usd,
                balance_btc=row.balance_btc,
            )
            for row in result.fetchall()
        ]
