"""Pydantic schemas for bet submission and payout previews.

Stakes are integer minor units of `currency` (cents or satoshis).
"""

from pydantic import BaseModel, Field

from src.sb_common.enums import BetType, Currency, MarketKind, Outcome
from src.sb_odds.domain.models import LegKey, Selection
from src.sb_odds.domain.selection_set import SelectionSet


class LegIn(BaseModel):
    event_id: str = Field(..., min_length=1, max_length=128)
    market: MarketKind
    outcome: Outcome
    odds: int = Field(..., description="Quoted American odds, non-zero")
    league: str = Field("", max_length=128)
    event_label: str = Field("", max_length=256)
    stake: int = Field(0, ge=0, description="Per-leg stake, single mode only")

    @property
    def key(self) -> LegKey:
        return LegKey(self.event_id, self.market, self.outcome)

    def to_selection(self) -> Selection:
        return Selection(
            event_id=self.event_id,
            market=self.market,
            outcome=self.outcome,
            odds=self.odds,
            league=self.league,
            event_label=self.event_label,
        )


class SlipRequest(BaseModel):
    mode: BetType
    currency: Currency
    stake: int = Field(0, ge=0, description="Shared stake, parlay mode only")
    legs: list[LegIn] = Field(..., min_length=1, max_length=20)

    def to_selection_set(self) -> SelectionSet:
        slip = SelectionSet()
        for leg in self.legs:
            slip.add(leg.to_selection())
        return slip

    def leg_stakes(self) -> dict[LegKey, int] | None:
        """Per-leg stakes, or None when no leg carries one (shared stake applies)."""
        if not any(leg.stake for leg in self.legs):
            return None
        return {leg.key: leg.stake for leg in self.legs}


class LegQuote(BaseModel):
    key: str
    odds: int
    odds_display: str
    stake: int
    potential_payout: int
    potential_payout_display: str


class QuoteResponse(BaseModel):
    mode: str
    inferred_mode: str
    currency: str
    legs: list[LegQuote]
    combined_odds: int | None
    combined_odds_display: str | None
    total_stake: int
    total_stake_display: str
    potential_payout: int
    potential_payout_display: str


class SubmitResponse(BaseModel):
    bet_ids: list[str]
