"""Repository Protocol for bets and their legs."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.domain.models import Bet, BetDraft
from src.sb_common.enums import BetStatus
from src.sb_common.money import Money


class BetRepositoryProtocol(Protocol):
    async def insert_bet(self, db: AsyncSession, draft: BetDraft) -> Bet: ...

    async def get_bet(
        self, db: AsyncSession, bet_id: str, for_update: bool = False
    ) -> Bet | None: ...

    async def update_status(
        self,
        db: AsyncSession,
        bet_id: str,
        current: BetStatus,
        target: BetStatus,
        payout: Money | None,
    ) -> bool: ...

    async def list_bets(
        self,
        db: AsyncSession,
        user_id: str | None,
        statuses: list[BetStatus] | None,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Bet]: ...
