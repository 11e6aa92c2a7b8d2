"""AccountApplicationService: read side of the balance store.

Balance mutations live in sb_ledger; this service only reads.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.application.schemas import (
    BalanceResponse,
    TransactionItem,
    TransactionListResponse,
)
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_account.infrastructure.persistence import AccountRepository
from src.sb_common.errors import AccountNotFoundError
from src.sb_common.pagination import id_cursor_decode, id_cursor_encode
from src.sb_gateway.auth.principal import Principal, require_authenticated


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_balance(
        self, db: AsyncSession, principal: Principal | None
    ) -> BalanceResponse:
        principal = require_authenticated(principal)
        account = await self._repo.get_account(db, principal.user_id)
        if account is None:
            raise AccountNotFoundError(principal.user_id)
        return BalanceResponse.from_account(account)

    async def list_transactions(
        self,
        db: AsyncSession,
        principal: Principal | None,
        cursor: str | None,
        limit: int,
        kind: str | None,
    ) -> TransactionListResponse:
        principal = require_authenticated(principal)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        rows = await self._repo.list_transactions(
            db, principal.user_id, id_cursor_decode(cursor), limit + 1, kind
        )
        has_more = len(rows) > limit
        page = rows[:limit]
        next_cursor = id_cursor_encode(page[-1].id) if has_more and page else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
