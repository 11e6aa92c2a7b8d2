"""Bet domain models: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime

from src.sb_common.enums import BetStatus, BetType, Currency, MarketKind, Outcome
from src.sb_common.money import Money
from src.sb_odds.domain.models import Selection


@dataclass(frozen=True)
class BetSelection:
    """Persisted leg. Written once with its bet, never edited."""

    event_id: str
    market: MarketKind
    outcome: Outcome
    odds: int
    league: str = ""
    event_label: str = ""

    @classmethod
    def from_selection(cls, selection: Selection) -> "BetSelection":
        return cls(
            event_id=selection.event_id,
            market=selection.market,
            outcome=selection.outcome,
            odds=selection.odds,
            league=selection.league,
            event_label=selection.event_label,
        )


@dataclass
class Bet:
    id: str
    user_id: str
    bet_type: BetType
    status: BetStatus
    stake: Money
    potential_payout: Money        # same currency as stake
    payout: Money | None = None    # amount actually credited (won / void / rejected)
    selections: list[BetSelection] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    settled_at: datetime | None = None

    @property
    def currency(self) -> Currency:
        return self.stake.currency


@dataclass(frozen=True)
class BetDraft:
    """A bet about to be placed: everything except the server-assigned fields."""

    user_id: str
    bet_type: BetType
    stake: Money
    potential_payout: Money
    selections: tuple[BetSelection, ...]

    def __post_init__(self) -> None:
        if self.stake.amount <= 0:
            raise ValueError("stake must be positive")
        if self.potential_payout.currency is not self.stake.currency:
            raise ValueError("payout currency must match stake currency")
        if not self.selections:
            raise ValueError("a bet needs at least one selection")
