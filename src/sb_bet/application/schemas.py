"""Pydantic schemas for bet read endpoints (player and admin)."""

from decimal import Decimal
from enum import Enum
from functools import reduce

from pydantic import BaseModel

from src.sb_bet.domain.models import Bet, BetSelection
from src.sb_bet.domain.state_machine import OPEN_STATUSES, SETTLED_STATUSES
from src.sb_common.enums import BetStatus
from src.sb_common.money import to_display
from src.sb_odds.domain.odds import format_odds, to_american, to_decimal_multiplier


class BetGroup(str, Enum):
    OPEN = "open"
    SETTLED = "settled"
    ALL = "all"


GROUP_STATUSES: dict[BetGroup, list[BetStatus] | None] = {
    BetGroup.OPEN: sorted(OPEN_STATUSES),
    BetGroup.SETTLED: sorted(SETTLED_STATUSES),
    BetGroup.ALL: None,
}


def combined_odds(selections: list[BetSelection]) -> int | None:
    """Quoted odds of the whole bet: the leg's own for singles, the product for parlays."""
    if not selections:
        return None
    if len(selections) == 1:
        return selections[0].odds
    product = reduce(
        lambda acc, leg: acc * to_decimal_multiplier(leg.odds), selections, Decimal(1)
    )
    return to_american(product)


class BetSelectionItem(BaseModel):
    event_id: str
    league: str
    event_label: str
    market: str
    outcome: str
    odds: int
    odds_display: str


class BetItem(BaseModel):
    id: str
    user_id: str
    bet_type: str
    status: str
    currency: str
    stake: int
    stake_display: str
    potential_payout: int
    potential_payout_display: str
    payout: int | None
    payout_display: str | None
    odds: int | None
    odds_display: str | None
    selections: list[BetSelectionItem]
    created_at: str
    settled_at: str | None

    @classmethod
    def from_domain(cls, bet: Bet) -> "BetItem":
        odds = combined_odds(bet.selections)
        return cls(
            id=bet.id,
            user_id=bet.user_id,
            bet_type=bet.bet_type.value,
            status=bet.status.value,
            currency=bet.currency.value,
            stake=bet.stake.amount,
            stake_display=to_display(bet.stake),
            potential_payout=bet.potential_payout.amount,
            potential_payout_display=to_display(bet.potential_payout),
            payout=bet.payout.amount if bet.payout is not None else None,
            payout_display=to_display(bet.payout) if bet.payout is not None else None,
            odds=odds,
            odds_display=format_odds(odds) if odds is not None else None,
            selections=[
                BetSelectionItem(
                    event_id=s.event_id,
                    league=s.league,
                    event_label=s.event_label,
                    market=s.market.value,
                    outcome=s.outcome.value,
                    odds=s.odds,
                    odds_display=format_odds(s.odds),
                )
                for s in bet.selections
            ],
            created_at=bet.created_at.isoformat() if bet.created_at else "",
            settled_at=bet.settled_at.isoformat() if bet.settled_at else None,
        )


class BetListResponse(BaseModel):
    items: list[BetItem]
    next_cursor: str | None
    has_more: bool
