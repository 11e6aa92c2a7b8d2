"""Unit tests for the odds feed client, mapping and Redis-cached service."""

import json
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from src.sb_common.enums import MarketKind, Outcome
from src.sb_common.errors import InvalidOddsError, OddsFeedUnavailableError
from src.sb_odds.application.service import OddsFeedService
from src.sb_odds.domain.feed import Game, SideOdds, quoted_price, selection_from_game
from src.sb_odds.infrastructure.feed_client import OddsFeedClient, map_event, pick_bookmaker


def _event(bookmakers: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "id": "evt-1",
        "sport_key": "soccer_epl",
        "sport_title": "EPL",
        "commence_time": "2026-10-20T19:00:00Z",
        "home_team": "Arsenal",
        "away_team": "Chelsea",
        "bookmakers": bookmakers if bookmakers is not None else [
            {
                "key": "fanduel",
                "markets": [
                    {"key": "h2h", "outcomes": [
                        {"name": "Arsenal", "price": -120},
                        {"name": "Chelsea", "price": 310},
                        {"name": "Draw", "price": 260},
                    ]},
                    {"key": "spreads", "outcomes": [
                        {"name": "Arsenal", "price": 105, "point": -0.5},
                        {"name": "Chelsea", "price": -125, "point": 0.5},
                    ]},
                    {"key": "totals", "outcomes": [
                        {"name": "Over", "price": -110, "point": 2.5},
                        {"name": "Under", "price": -110, "point": 2.5},
                    ]},
                ],
            }
        ],
    }


def _game() -> Game:
    return map_event(_event(), ["fanduel"])


class TestMapEvent:
    def test_maps_all_markets(self) -> None:
        game = _game()
        assert game.league == "EPL"
        assert game.label == "Chelsea @ Arsenal"
        assert game.home_odds.moneyline == -120
        assert game.away_odds.moneyline == 310
        assert game.draw_moneyline == 260
        assert game.home_odds.spread_point == -0.5
        assert game.away_odds.spread_odds == -125
        assert game.home_odds.total_point == 2.5

    def test_no_bookmakers_means_no_prices(self) -> None:
        game = map_event(_event(bookmakers=[]), ["fanduel"])
        assert game.home_odds == SideOdds()
        assert game.draw_moneyline is None

    def test_pick_bookmaker_prefers_configured_order(self) -> None:
        books = [{"key": "bovada"}, {"key": "draftkings"}, {"key": "fanduel"}]
        assert pick_bookmaker(books, ["fanduel", "draftkings"])["key"] == "fanduel"  # type: ignore[index]
        assert pick_bookmaker(books, ["betmgm"])["key"] == "bovada"  # type: ignore[index]
        assert pick_bookmaker([], ["fanduel"]) is None


class TestSelectionFromGame:
    def test_snapshots_price_and_metadata(self) -> None:
        sel = selection_from_game(_game(), MarketKind.TOTAL, Outcome.UNDER)
        assert sel.odds == -110
        assert sel.league == "EPL"
        assert sel.event_label == "Chelsea @ Arsenal"

    def test_draw(self) -> None:
        assert quoted_price(_game(), MarketKind.MONEYLINE, Outcome.DRAW) == 260

    def test_market_not_offered(self) -> None:
        with pytest.raises(InvalidOddsError):
            selection_from_game(_game(), MarketKind.SPREAD, Outcome.OVER)

    def test_game_dict_round_trip_for_cache(self) -> None:
        game = _game()
        assert Game.from_dict(json.loads(json.dumps(game.to_dict()))) == game


class TestOddsFeedClient:
    async def test_requests_american_odds(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[_event()])

        client = OddsFeedClient(
            api_key="k", base_url="https://odds.test/v4", transport=httpx.MockTransport(handler)
        )
        games = await client.fetch_games("soccer_epl", "uk", "h2h")

        assert [g.id for g in games] == ["evt-1"]
        assert seen[0].url.path == "/v4/sports/soccer_epl/odds/"
        assert seen[0].url.params["oddsFormat"] == "american"
        assert seen[0].url.params["apiKey"] == "k"

    async def test_missing_key(self) -> None:
        with pytest.raises(OddsFeedUnavailableError):
            await OddsFeedClient(api_key="").fetch_games("nba", "us", "h2h")

    async def test_upstream_error_status(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(429))
        client = OddsFeedClient(api_key="k", base_url="https://odds.test", transport=transport)
        with pytest.raises(OddsFeedUnavailableError) as exc_info:
            await client.fetch_games("nba", "us", "h2h")
        assert exc_info.value.http_status == 502

    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = OddsFeedClient(
            api_key="k", base_url="https://odds.test", transport=httpx.MockTransport(handler)
        )
        with pytest.raises(OddsFeedUnavailableError):
            await client.fetch_games("nba", "us", "h2h")


class TestOddsFeedService:
    async def test_cache_hit_skips_upstream(self) -> None:
        client = AsyncMock()
        redis = AsyncMock()
        redis.get.return_value = json.dumps([_game().to_dict()])

        games = await OddsFeedService(client).get_games(redis, "soccer_epl")

        assert games == [_game()]
        client.fetch_games.assert_not_awaited()

    async def test_cache_miss_fetches_and_stores(self) -> None:
        client = AsyncMock()
        client.fetch_games.return_value = [_game()]
        redis = AsyncMock()
        redis.get.return_value = None

        await OddsFeedService(client).get_games(redis, "soccer_epl", "uk", "h2h")

        client.fetch_games.assert_awaited_once_with("soccer_epl", "uk", "h2h")
        redis.set.assert_awaited_once()
        assert redis.set.await_args.args[0] == "odds:soccer_epl:uk:h2h"

    async def test_quote_unknown_event(self) -> None:
        client = AsyncMock()
        client.fetch_games.return_value = [_game()]
        redis = AsyncMock()
        redis.get.return_value = None

        svc = OddsFeedService(client)
        assert await svc.quote_selection(
            redis, "soccer_epl", "other", MarketKind.MONEYLINE, Outcome.HOME
        ) is None
        sel = await svc.quote_selection(
            redis, "soccer_epl", "evt-1", MarketKind.MONEYLINE, Outcome.AWAY
        )
        assert sel is not None
        assert sel.odds == 310
