"""Selection domain models: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass

from src.sb_common.enums import MarketKind, Outcome


@dataclass(frozen=True)
class LegKey:
    """Uniqueness key of a leg within a slip: (event, market, outcome)."""

    event_id: str
    market: MarketKind
    outcome: Outcome

    def __str__(self) -> str:
        return f"{self.event_id}-{self.market.value}-{self.outcome.value}"


@dataclass(frozen=True)
class Selection:
    """One leg with its odds snapshot. Frozen: a placed bet never sees live odds."""

    event_id: str
    market: MarketKind
    outcome: Outcome
    odds: int
    league: str = ""
    event_label: str = ""

    @property
    def key(self) -> LegKey:
        return LegKey(self.event_id, self.market, self.outcome)
