"""Admin settlement console.

Thin orchestration over Ledger and BetQueryService. Read endpoints check
the admin capability here; mutations are checked again inside the Ledger.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_account.application.schemas import BalanceResponse
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_account.infrastructure.persistence import AccountRepository
from src.sb_admin.application.schemas import UserSummary
from src.sb_bet.application.schemas import BetItem, BetListResponse
from src.sb_bet.application.service import BetQueryService
from src.sb_common.enums import BetStatus, Capability, SettlementOutcome, TransactionKind
from src.sb_common.money import Money
from src.sb_gateway.auth.authorizer import Authorizer, RoleAuthorizer, require_capability
from src.sb_gateway.auth.principal import Principal
from src.sb_ledger.domain.ledger import Ledger


class AdminConsoleService:
    def __init__(
        self,
        ledger: Ledger | None = None,
        bets: BetQueryService | None = None,
        accounts: AccountRepositoryProtocol | None = None,
        authorizer: Authorizer | None = None,
    ) -> None:
        self._authorizer: Authorizer = authorizer or RoleAuthorizer()
        self._ledger = ledger or Ledger(authorizer=self._authorizer)
        self._bets = bets or BetQueryService()
        self._accounts: AccountRepositoryProtocol = accounts or AccountRepository()

    async def list_bets(
        self,
        db: AsyncSession,
        principal: Principal | None,
        status: BetStatus | None,
        cursor: str | None,
        limit: int,
    ) -> BetListResponse:
        await require_capability(self._authorizer, db, principal, Capability.ADMIN)
        return await self._bets.list_by_status(db, status, cursor, limit)

    async def approve(self, db: AsyncSession, principal: Principal | None, bet_id: str) -> BetItem:
        return BetItem.from_domain(await self._ledger.approve(db, principal, bet_id))

    async def reject(self, db: AsyncSession, principal: Principal | None, bet_id: str) -> BetItem:
        return BetItem.from_domain(await self._ledger.reject(db, principal, bet_id))

    async def settle(
        self,
        db: AsyncSession,
        principal: Principal | None,
        bet_id: str,
        outcome: SettlementOutcome,
        payout: Money | None = None,
    ) -> BetItem:
        bet = await self._ledger.settle(db, principal, bet_id, outcome, payout)
        return BetItem.from_domain(bet)

    async def search_users(
        self, db: AsyncSession, principal: Principal | None, email: str
    ) -> list[UserSummary]:
        await require_capability(self._authorizer, db, principal, Capability.ADMIN)
        profiles = await self._accounts.search_by_email(db, email)
        return [UserSummary.from_profile(p) for p in profiles]

    async def adjust_balance(
        self,
        db: AsyncSession,
        principal: Principal | None,
        user_id: str,
        amount: Money,
        kind: TransactionKind,
        note: str = "",
    ) -> BalanceResponse:
        account = await self._ledger.adjust_balance(db, principal, user_id, amount, kind, note)
        return BalanceResponse.from_account(account)
