"""The Odds API client: fetches American-format odds and maps events to Games."""

import logging
import math
from collections.abc import Sequence
from typing import Any

import httpx

from config.settings import settings
from src.sb_common.errors import OddsFeedUnavailableError
from src.sb_odds.domain.feed import Game, SideOdds

logger = logging.getLogger(__name__)


def _price(outcome: dict[str, Any] | None) -> int:
    value = (outcome or {}).get("price")
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    return 0


def _point(*outcomes: dict[str, Any] | None) -> float:
    for outcome in outcomes:
        value = (outcome or {}).get("point")
        if isinstance(value, (int, float)) and math.isfinite(value):
            return float(value)
    return 0.0


def pick_bookmaker(
    bookmakers: list[dict[str, Any]], preferred: Sequence[str]
) -> dict[str, Any] | None:
    """First preferred bookmaker present, else the first one listed."""
    if not bookmakers:
        return None
    by_key = {b.get("key"): b for b in bookmakers}
    for key in preferred:
        if key in by_key:
            return by_key[key]
    return bookmakers[0]


def map_event(event: dict[str, Any], preferred: Sequence[str]) -> Game:
    bookmaker = pick_bookmaker(event.get("bookmakers") or [], preferred)
    markets = {m.get("key"): m.get("outcomes") or [] for m in (bookmaker or {}).get("markets", [])}
    home, away = event.get("home_team", ""), event.get("away_team", "")

    def find(market_key: str, name: str) -> dict[str, Any] | None:
        for outcome in markets.get(market_key, []):
            if (outcome.get("name") or "").lower() == name.lower():
                return outcome
        return None

    over, under = find("totals", "over"), find("totals", "under")
    total_point = _point(over, under)

    def side(team: str) -> SideOdds:
        spread = find("spreads", team)
        return SideOdds(
            moneyline=_price(find("h2h", team)),
            spread_point=_point(spread),
            spread_odds=_price(spread),
            total_point=total_point,
            over_odds=_price(over),
            under_odds=_price(under),
        )

    draw = find("h2h", "draw")
    return Game(
        id=str(event.get("id")),
        league=event.get("sport_title") or event.get("sport_key") or "Sports",
        home_team=home,
        away_team=away,
        commence_time=event.get("commence_time", ""),
        is_live=bool(event.get("inplay", False)),
        home_odds=side(home),
        away_odds=side(away),
        draw_moneyline=_price(draw) if draw else None,
    )


class OddsFeedClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        preferred_bookmakers: Sequence[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = settings.ODDS_API_KEY if api_key is None else api_key
        self._base_url = base_url or settings.ODDS_API_BASE_URL
        self._preferred = list(preferred_bookmakers or settings.ODDS_PREFERRED_BOOKMAKERS)
        self._transport = transport

    async def fetch_games(self, sport: str, regions: str, markets: str) -> list[Game]:
        if not self._api_key:
            raise OddsFeedUnavailableError("ODDS_API_KEY is not configured")

        params = {
            "apiKey": self._api_key,
            "regions": regions,
            "markets": markets,
            "oddsFormat": "american",
            "dateFormat": "iso",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=settings.ODDS_REQUEST_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                resp = await client.get(f"/sports/{sport}/odds/", params=params)
        except httpx.HTTPError as e:
            logger.error("Odds feed request failed for %s: %s", sport, e)
            raise OddsFeedUnavailableError(str(e)) from e

        if resp.status_code != 200:
            logger.warning("Odds feed returned %d for %s", resp.status_code, sport)
            raise OddsFeedUnavailableError(f"upstream status {resp.status_code}")

        data = resp.json()
        if not isinstance(data, list):
            return []
        return [map_event(evt, self._preferred) for evt in data]
