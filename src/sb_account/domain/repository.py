"""Repository Protocol: unit tests inject a mock conforming to it."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.domain.models import Account, AccountProfile, Transaction
from src.sb_common.enums import TransactionKind
from src.sb_common.money import Money


class AccountRepositoryProtocol(Protocol):
    async def get_account(self, db: AsyncSession, user_id: str) -> Account | None: ...

    async def apply_delta(
        self, db: AsyncSession, user_id: str, delta: Money
    ) -> Account | None: ...

    async def insert_transaction(
        self,
        db: AsyncSession,
        user_id: str,
        kind: TransactionKind,
        amount: Money,
        note: str,
        bet_id: str | None = None,
    ) -> Transaction: ...

    async def list_transactions(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: int | None,
        limit: int,
        kind: str | None,
    ) -> list[Transaction]: ...

    async def search_by_email(self, db: AsyncSession, email: str) -> list[AccountProfile]: ...
