"""Read-only odds feed shape and the bridge from a feed game to a Selection."""

from dataclasses import asdict, dataclass, field
from typing import Any

from src.sb_common.enums import MarketKind, Outcome
from src.sb_common.errors import InvalidOddsError
from src.sb_odds.domain.models import Selection


@dataclass
class SideOdds:
    """One team's prices. 0 means the market is not offered."""

    moneyline: int = 0
    spread_point: float = 0.0
    spread_odds: int = 0
    total_point: float = 0.0
    over_odds: int = 0
    under_odds: int = 0


@dataclass
class Game:
    id: str
    league: str
    home_team: str
    away_team: str
    commence_time: str
    is_live: bool = False
    home_odds: SideOdds = field(default_factory=SideOdds)
    away_odds: SideOdds = field(default_factory=SideOdds)
    draw_moneyline: int | None = None

    @property
    def label(self) -> str:
        return f"{self.away_team} @ {self.home_team}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Game":
        return cls(
            id=data["id"],
            league=data["league"],
            home_team=data["home_team"],
            away_team=data["away_team"],
            commence_time=data["commence_time"],
            is_live=data.get("is_live", False),
            home_odds=SideOdds(**data.get("home_odds", {})),
            away_odds=SideOdds(**data.get("away_odds", {})),
            draw_moneyline=data.get("draw_moneyline"),
        )


def quoted_price(game: Game, market: MarketKind, outcome: Outcome) -> int:
    """Look up the quoted odds for (market, outcome); 0 if not offered."""
    if market is MarketKind.MONEYLINE:
        if outcome is Outcome.HOME:
            return game.home_odds.moneyline
        if outcome is Outcome.AWAY:
            return game.away_odds.moneyline
        if outcome is Outcome.DRAW:
            return game.draw_moneyline or 0
    elif market is MarketKind.SPREAD:
        if outcome is Outcome.HOME:
            return game.home_odds.spread_odds
        if outcome is Outcome.AWAY:
            return game.away_odds.spread_odds
    elif market is MarketKind.TOTAL:
        # Totals are game-level; both sides carry the same line
        if outcome is Outcome.OVER:
            return game.home_odds.over_odds
        if outcome is Outcome.UNDER:
            return game.home_odds.under_odds
    return 0


def selection_from_game(game: Game, market: MarketKind, outcome: Outcome) -> Selection:
    """Snapshot the current price of a feed game into a Selection."""
    odds = quoted_price(game, market, outcome)
    if odds == 0:
        raise InvalidOddsError(odds)
    return Selection(
        event_id=game.id,
        market=market,
        outcome=outcome,
        odds=odds,
        league=game.league,
        event_label=game.label,
    )
