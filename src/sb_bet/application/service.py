"""BetQueryService: read-only bet listings for players and admins."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.application.schemas import GROUP_STATUSES, BetGroup, BetItem, BetListResponse
from src.sb_bet.domain.models import Bet
from src.sb_bet.domain.repository import BetRepositoryProtocol
from src.sb_bet.infrastructure.persistence import BetRepository
from src.sb_common.enums import BetStatus
from src.sb_common.errors import BetNotFoundError
from src.sb_common.pagination import ts_cursor_decode, ts_cursor_encode
from src.sb_gateway.auth.principal import Principal, require_authenticated


class BetQueryService:
    def __init__(self, repo: BetRepositoryProtocol | None = None) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()

    async def list_for_user(
        self,
        db: AsyncSession,
        principal: Principal | None,
        group: BetGroup,
        cursor: str | None,
        limit: int,
    ) -> BetListResponse:
        principal = require_authenticated(principal)
        return await self._page(db, principal.user_id, GROUP_STATUSES[group], cursor, limit)

    async def get_for_user(
        self, db: AsyncSession, principal: Principal | None, bet_id: str
    ) -> BetItem:
        """Another user's bet reads as not found."""
        principal = require_authenticated(principal)
        bet = await self._repo.get_bet(db, bet_id)
        if bet is None or bet.user_id != principal.user_id:
            raise BetNotFoundError(bet_id)
        return BetItem.from_domain(bet)

    async def list_by_status(
        self,
        db: AsyncSession,
        status: BetStatus | None,
        cursor: str | None,
        limit: int,
    ) -> BetListResponse:
        """All users' bets; the caller has already checked the admin capability."""
        return await self._page(db, None, [status] if status else None, cursor, limit)

    async def _page(
        self,
        db: AsyncSession,
        user_id: str | None,
        statuses: list[BetStatus] | None,
        cursor: str | None,
        limit: int,
    ) -> BetListResponse:
        cursor_ts, cursor_id = ts_cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        bets: list[Bet] = await self._repo.list_bets(
            db, user_id, statuses, cursor_ts, cursor_id, limit + 1
        )
        has_more = len(bets) > limit
        page = bets[:limit]
        next_cursor = None
        if has_more and page and page[-1].created_at is not None:
            next_cursor = ts_cursor_encode(page[-1].created_at, page[-1].id)
        return BetListResponse(
            items=[BetItem.from_domain(b) for b in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
