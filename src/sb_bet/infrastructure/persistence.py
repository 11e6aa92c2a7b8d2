"""BetRepository: concrete implementation of BetRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
Transaction ownership: the CALLER commits or rolls back.
"""

import uuid
from collections import defaultdict
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sb_bet.domain.models import Bet, BetDraft, BetSelection
from src.sb_bet.domain.state_machine import is_terminal
from src.sb_common.enums import BetStatus, BetType, MarketKind, Outcome
from src.sb_common.errors import InternalError
from src.sb_common.money import Money

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_BET_COLUMNS = """
    id, user_id, bet_type, status,
    stake_usd, stake_btc,
    potential_payout_usd, potential_payout_btc,
    payout_usd, payout_btc,
    created_at, updated_at, settled_at
"""

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets (
        user_id, bet_type, status,
        stake_usd, stake_btc,
        potential_payout_usd, potential_payout_btc
    ) VALUES (
        :user_id, :bet_type, 'pending',
        :stake_usd, :stake_btc,
        :potential_payout_usd, :potential_payout_btc
    )
    RETURNING {_BET_COLUMNS}
""")

_INSERT_SELECTION_SQL = text("""
    INSERT INTO bet_selections (
        bet_id, leg_index, event_id, league, event_label, market, outcome, odds
    ) VALUES (
        :bet_id, :leg_index, :event_id, :league, :event_label, :market, :outcome, :odds
    )
""")

_GET_BET_SQL = text(f"SELECT {_BET_COLUMNS} FROM bets WHERE id = :bet_id")

_GET_BET_FOR_UPDATE_SQL = text(f"SELECT {_BET_COLUMNS} FROM bets WHERE id = :bet_id FOR UPDATE")

# Compare-and-set on status: zero rows back means another writer moved it first.
_UPDATE_STATUS_SQL = text("""
    UPDATE bets
    SET status = :target,
        payout_usd = COALESCE(CAST(:payout_usd AS BIGINT), payout_usd),
        payout_btc = COALESCE(CAST(:payout_btc AS BIGINT), payout_btc),
        settled_at = CASE WHEN CAST(:terminal AS BOOLEAN) THEN NOW() ELSE settled_at END,
        updated_at = NOW()
    WHERE id = :bet_id AND status = :current
    RETURNING id
""")

_LIST_BETS_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE
        (CAST(:user_id AS TEXT) IS NULL OR user_id = CAST(:user_id AS TEXT))
        AND (CAST(:statuses AS TEXT[]) IS NULL OR status = ANY(CAST(:statuses AS TEXT[])))
        AND (
            CAST(:cursor_ts AS TIMESTAMPTZ) IS NULL
            OR created_at < CAST(:cursor_ts AS TIMESTAMPTZ)
            OR (
                created_at = CAST(:cursor_ts AS TIMESTAMPTZ)
                AND id < CAST(:cursor_id AS UUID)
            )
        )
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_LIST_SELECTIONS_SQL = text("""
    SELECT bet_id, event_id, league, event_label, market, outcome, odds
    FROM bet_selections
    WHERE bet_id = ANY(CAST(:bet_ids AS UUID[]))
    ORDER BY bet_id, leg_index
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_bet(row: Any) -> Bet:
    stake = Money.from_columns(row.stake_usd, row.stake_btc)
    payout: Money | None = None
    if row.payout_usd is not None or row.payout_btc is not None:
        payout = stake.pick(row.payout_usd or 0, row.payout_btc or 0)
    return Bet(
        id=str(row.id),
        user_id=row.user_id,
        bet_type=BetType(row.bet_type),
        status=BetStatus(row.status),
        stake=stake,
        potential_payout=stake.pick(row.potential_payout_usd, row.potential_payout_btc),
        payout=payout,
        created_at=row.created_at,
        updated_at=row.updated_at,
        settled_at=row.settled_at,
    )


def _row_to_selection(row: Any) -> BetSelection:
    return BetSelection(
        event_id=row.event_id,
        market=MarketKind(row.market),
        outcome=Outcome(row.outcome),
        odds=row.odds,
        league=row.league or "",
        event_label=row.event_label or "",
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class BetRepository:
    async def insert_bet(self, db: AsyncSession, draft: BetDraft) -> Bet:
        """Insert the bet row and all its legs. Status starts at pending."""
        stake_usd, stake_btc = draft.stake.to_columns()
        payout_usd, payout_btc = draft.potential_payout.to_columns()
        result = await db.execute(
            _INSERT_BET_SQL,
            {
                "user_id": draft.user_id,
                "bet_type": draft.bet_type.value,
                "stake_usd": stake_usd,
                "stake_btc": stake_btc,
                "potential_payout_usd": payout_usd,
                "potential_payout_btc": payout_btc,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Bet insert returned no rows")
        bet = _row_to_bet(row)

        await db.execute(
            _INSERT_SELECTION_SQL,
            [
                {
                    "bet_id": row.id,
                    "leg_index": index,
                    "event_id": leg.event_id,
                    "league": leg.league,
                    "event_label": leg.event_label,
                    "market": leg.market.value,
                    "outcome": leg.outcome.value,
                    "odds": leg.odds,
                }
                for index, leg in enumerate(draft.selections)
            ],
        )
        bet.selections = list(draft.selections)
        return bet

    async def get_bet(
        self, db: AsyncSession, bet_id: str, for_update: bool = False
    ) -> Bet | None:
        sql = _GET_BET_FOR_UPDATE_SQL if for_update else _GET_BET_SQL
        row = (await db.execute(sql, {"bet_id": bet_id})).fetchone()
        if row is None:
            return None
        bet = _row_to_bet(row)
        await self._attach_selections(db, [bet])
        return bet

    async def update_status(
        self,
        db: AsyncSession,
        bet_id: str,
        current: BetStatus,
        target: BetStatus,
        payout: Money | None,
    ) -> bool:
        payout_usd, payout_btc = payout.to_columns() if payout is not None else (None, None)
        result = await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "bet_id": bet_id,
                "current": current.value,
                "target": target.value,
                "payout_usd": payout_usd,
                "payout_btc": payout_btc,
                "terminal": is_terminal(target),
            },
        )
        return result.fetchone() is not None

    async def list_bets(
        self,
        db: AsyncSession,
        user_id: str | None,
        statuses: list[BetStatus] | None,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Bet]:
        result = await db.execute(
            _LIST_BETS_SQL,
            {
                "user_id": user_id,
                "statuses": [s.value for s in statuses] if statuses else None,
                "cursor_ts": cursor_ts,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        bets = [_row_to_bet(row) for row in result.fetchall()]
        await self._attach_selections(db, bets)
        return bets

    async def _attach_selections(self, db: AsyncSession, bets: list[Bet]) -> None:
        if not bets:
            return
        result = await db.execute(
            _LIST_SELECTIONS_SQL, {"bet_ids": [uuid.UUID(b.id) for b in bets]}
        )
        by_bet: dict[str, list[BetSelection]] = defaultdict(list)
        for row in result.fetchall():
            by_bet[str(row.bet_id)].append(_row_to_selection(row))
        for bet in bets:
            bet.selections = by_bet.get(bet.id, [])
